# apps/core/admin.py

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils import timezone
from django.utils.html import format_html
from .models import (
    Usuario, Projeto, StatusProjeto, Board, Coluna, Tarefa,
    RegistroHora, Notificacao
)
from .utils import formatar_duracao

ICONES_PRIORIDADE = {
    'baixa': '🟢',
    'media': '🟡',
    'alta': '🟠',
    'critica': '🔴'
}


@admin.register(Usuario)
class UsuarioAdmin(BaseUserAdmin):
    """Admin customizado para o modelo Usuario"""

    list_display = [
        'username', 'email', 'get_full_name', 'tipo_badge',
        'is_active', 'date_joined'
    ]
    list_filter = ['tipo', 'is_staff', 'is_active', 'date_joined']
    search_fields = ['username', 'first_name', 'last_name', 'email']
    ordering = ['-date_joined']

    fieldsets = BaseUserAdmin.fieldsets + (
        ('Informações Adicionais', {
            'fields': ('tipo', 'telefone')
        }),
        ('Preferências', {
            'fields': ('modo_tema', 'cor_tema')
        }),
    )

    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        ('Informações Adicionais', {
            'fields': ('tipo', 'telefone')
        }),
    )

    def tipo_badge(self, obj):
        cores = {
            'admin': '#EF4444',
            'gerente': '#F59E0B',
            'funcionario': '#3B82F6'
        }
        return format_html(
            '<span style="background-color: {}; color: white; '
            'padding: 3px 8px; border-radius: 4px; font-size: 11px;">{}</span>',
            cores.get(obj.tipo, '#6B7280'), obj.get_tipo_display()
        )

    tipo_badge.short_description = 'Tipo'


class StatusProjetoInline(admin.TabularInline):
    model = StatusProjeto
    extra = 0
    fields = ['nome', 'posicao', 'cor']
    ordering = ['posicao']


@admin.register(Projeto)
class ProjetoAdmin(admin.ModelAdmin):
    """Admin para gerenciamento de projetos"""

    list_display = [
        'nome', 'cliente', 'criado_por', 'membros_count',
        'boards_count', 'ativo', 'criado_em'
    ]
    list_filter = ['ativo', 'criado_em']
    search_fields = ['nome', 'cliente', 'descricao']
    filter_horizontal = ['membros']
    readonly_fields = ['criado_em', 'atualizado_em']
    inlines = [StatusProjetoInline]

    fieldsets = (
        ('Informações Básicas', {
            'fields': ('nome', 'cliente', 'descricao', 'ativo')
        }),
        ('Equipe', {
            'fields': ('criado_por', 'membros')
        }),
        ('Datas', {
            'fields': ('criado_em', 'atualizado_em'),
            'classes': ('collapse',)
        })
    )

    def membros_count(self, obj):
        return obj.membros.count()

    membros_count.short_description = 'Membros'

    def boards_count(self, obj):
        return obj.boards.count()

    boards_count.short_description = 'Boards'


class ColunaInline(admin.TabularInline):
    model = Coluna
    extra = 0
    fields = ['titulo', 'status_valor', 'ordem', 'limite_wip', 'cor']
    ordering = ['ordem']


@admin.register(Board)
class BoardAdmin(admin.ModelAdmin):
    """Admin para boards Kanban"""

    list_display = ['titulo', 'projeto', 'colunas_count', 'tarefas_count', 'ativo', 'criado_em']
    list_filter = ['ativo', 'criado_em', 'projeto']
    search_fields = ['titulo', 'descricao', 'projeto__nome']
    readonly_fields = ['criado_em']
    inlines = [ColunaInline]

    def colunas_count(self, obj):
        return obj.colunas.count()

    colunas_count.short_description = 'Colunas'

    def tarefas_count(self, obj):
        return obj.tarefas_ativas().count()

    tarefas_count.short_description = 'Tarefas'


@admin.register(Coluna)
class ColunaAdmin(admin.ModelAdmin):
    """Admin para colunas do Kanban"""

    list_display = ['titulo', 'board', 'status_valor', 'ordem', 'tarefas_wip', 'cor_preview']
    list_filter = ['board__projeto', 'board']
    search_fields = ['titulo', 'status_valor', 'board__titulo']
    ordering = ['board', 'ordem']

    def tarefas_wip(self, obj):
        total = obj.tarefas().count()
        if obj.limite_wip > 0 and total >= obj.limite_wip:
            return format_html(
                '<span style="color: red; font-weight: bold;">{}/{}</span>',
                total, obj.limite_wip
            )
        elif obj.limite_wip > 0:
            return f"{total}/{obj.limite_wip}"
        return total

    tarefas_wip.short_description = 'Tarefas/WIP'

    def cor_preview(self, obj):
        return format_html(
            '<div style="width: 20px; height: 20px; background-color: {}; '
            'border: 1px solid #ccc; border-radius: 3px;"></div>',
            obj.cor
        )

    cor_preview.short_description = 'Cor'


@admin.register(Tarefa)
class TarefaAdmin(admin.ModelAdmin):
    """Admin para tarefas"""

    list_display = [
        'id', 'titulo', 'status', 'prioridade_badge',
        'responsavel', 'board', 'status_prazo'
    ]
    list_filter = ['prioridade', 'status', 'board', 'arquivado', 'criado_em']
    search_fields = ['titulo', 'descricao', 'notas']
    date_hierarchy = 'criado_em'
    readonly_fields = ['criado_em', 'atualizado_em']

    fieldsets = (
        ('Informações Básicas', {
            'fields': (
                'titulo', 'descricao', 'notas', 'board', 'status', 'responsavel',
                'prioridade', 'prazo', 'orcamento', 'arquivado'
            )
        }),
        ('Metadados', {
            'fields': ('posicao_kanban', 'criado_por', 'criado_em', 'atualizado_em'),
            'classes': ('collapse',)
        })
    )

    def prioridade_badge(self, obj):
        return f"{ICONES_PRIORIDADE.get(obj.prioridade, '')} {obj.get_prioridade_display()}"

    prioridade_badge.short_description = 'Prioridade'

    def status_prazo(self, obj):
        if not obj.prazo:
            return '-'

        if obj.esta_concluida():
            return format_html('<span style="color: green;">✓ Concluído</span>')

        hoje = timezone.localdate()
        if obj.esta_atrasado():
            return format_html(
                '<span style="color: red;">⚠️ Atrasado {} dias</span>',
                (hoje - obj.prazo).days
            )

        dias = (obj.prazo - hoje).days
        if dias == 0:
            return format_html('<span style="color: orange;">⏰ Vence hoje</span>')
        return f"Em {dias} dias"

    status_prazo.short_description = 'Prazo'


@admin.register(RegistroHora)
class RegistroHoraAdmin(admin.ModelAdmin):
    """Admin para registros de hora"""

    list_display = ['usuario', 'tarefa', 'descricao', 'inicio', 'fim', 'duracao_formatada', 'em_andamento']
    list_filter = ['em_andamento', 'usuario', 'inicio']
    search_fields = ['descricao', 'usuario__username']
    date_hierarchy = 'inicio'
    readonly_fields = ['duracao_segundos']

    def duracao_formatada(self, obj):
        return formatar_duracao(obj.duracao_segundos)

    duracao_formatada.short_description = 'Duração'


@admin.register(Notificacao)
class NotificacaoAdmin(admin.ModelAdmin):
    list_display = ['titulo', 'usuario', 'tipo', 'lida', 'criado_em']
    list_filter = ['tipo', 'lida', 'criado_em']
    search_fields = ['titulo', 'mensagem', 'usuario__username']
    readonly_fields = ['criado_em']
