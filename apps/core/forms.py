# apps/core/forms.py

from django import forms
from django.conf import settings
from django.contrib.auth.forms import AuthenticationForm
from django.core.exceptions import ValidationError
from django.utils import timezone

from .models import Tarefa, Usuario
from .tema import CORES, MODOS

CLASSE_INPUT = 'form-input w-full px-4 py-2 border rounded-lg'


class LoginForm(AuthenticationForm):
    """Formulário de login com os estilos da interface"""

    username = forms.CharField(
        label='Usuário',
        max_length=150,
        widget=forms.TextInput(attrs={
            'class': CLASSE_INPUT,
            'placeholder': 'Seu usuário',
            'autofocus': True
        })
    )

    password = forms.CharField(
        label='Senha',
        strip=False,
        widget=forms.PasswordInput(attrs={
            'class': CLASSE_INPUT,
            'placeholder': 'Sua senha'
        })
    )


class TarefaForm(forms.ModelForm):
    """
    Criação de tarefa em um board

    As opções de status vêm das colunas do board e as de responsável dos
    membros do projeto.
    """

    class Meta:
        model = Tarefa
        fields = ['titulo', 'descricao', 'status', 'responsavel', 'prioridade', 'prazo', 'orcamento']
        widgets = {
            'titulo': forms.TextInput(attrs={'class': CLASSE_INPUT, 'placeholder': 'Título da tarefa'}),
            'descricao': forms.Textarea(attrs={'class': CLASSE_INPUT, 'rows': 3}),
            'prazo': forms.DateInput(attrs={'class': CLASSE_INPUT, 'type': 'date'}),
            'orcamento': forms.NumberInput(attrs={'class': CLASSE_INPUT, 'step': '0.01', 'min': '0'}),
        }

    def __init__(self, *args, board=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.board = board

        colunas = list(board.colunas.all()) if board else []
        self.fields['status'] = forms.ChoiceField(
            label='Status',
            choices=[(coluna.status_valor, coluna.titulo) for coluna in colunas],
            initial=colunas[0].status_valor if colunas else None,
        )
        self.fields['responsavel'].queryset = (
            board.projeto.membros.filter(is_active=True) if board else Usuario.objects.none()
        )
        self.fields['responsavel'].required = False

    def clean_titulo(self):
        titulo = (self.cleaned_data.get('titulo') or '').strip()
        if not titulo:
            raise ValidationError('O título é obrigatório')
        return titulo

    def clean_descricao(self):
        descricao = self.cleaned_data.get('descricao') or ''
        if len(descricao) > settings.TRILHA_DESCRICAO_MAX:
            raise ValidationError(
                f'A descrição deve ter no máximo {settings.TRILHA_DESCRICAO_MAX} caracteres'
            )
        return descricao

    def clean_prazo(self):
        prazo = self.cleaned_data.get('prazo')
        if prazo and prazo < timezone.localdate():
            raise ValidationError('O prazo não pode estar no passado')
        return prazo

    def save(self, commit=True, criado_por=None):
        tarefa = super().save(commit=False)
        tarefa.board = self.board
        if criado_por is not None:
            tarefa.criado_por = criado_por
        if commit:
            tarefa.save()
        return tarefa


class TemaForm(forms.Form):
    """Preferência de tema enviada pelo seletor da interface"""

    modo = forms.ChoiceField(choices=[(modo, modo) for modo in MODOS])
    cor = forms.ChoiceField(choices=[(cor, cor) for cor in CORES])
