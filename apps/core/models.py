# apps/core/models.py

from decimal import Decimal

from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models, transaction
from django.db.models import Q
from django.utils import timezone

# Colunas criadas quando o projeto não define status próprios
COLUNAS_PADRAO = [
    ('A Fazer', '#6B7280'),
    ('Em Progresso', '#3B82F6'),
    ('Em Revisão', '#F59E0B'),
    ('Concluído', '#10B981'),
]

STATUS_INICIAL = 'A Fazer'
STATUS_CONCLUIDO = 'Concluído'


class Usuario(AbstractUser):
    """
    Modelo de usuário customizado

    Além do papel no sistema (admin, gerente, funcionário), guarda a
    preferência de tema usada pela interface.
    """

    TIPO_CHOICES = [
        ('admin', 'Administrador'),
        ('gerente', 'Gerente'),
        ('funcionario', 'Funcionário'),
    ]

    MODO_TEMA_CHOICES = [
        ('light', 'Claro'),
        ('dark', 'Escuro'),
        ('system', 'Sistema'),
    ]

    COR_TEMA_CHOICES = [
        ('default', 'Padrão'),
        ('blue', 'Azul'),
        ('green', 'Verde'),
        ('purple', 'Roxo'),
        ('orange', 'Laranja'),
        ('red', 'Vermelho'),
    ]

    # === INFORMAÇÕES PESSOAIS ===
    telefone = models.CharField(max_length=20, blank=True)
    tipo = models.CharField(max_length=20, choices=TIPO_CHOICES, default='funcionario')

    # === PREFERÊNCIAS ===
    modo_tema = models.CharField(max_length=10, choices=MODO_TEMA_CHOICES, default='system')
    cor_tema = models.CharField(max_length=10, choices=COR_TEMA_CHOICES, default='default')

    # === METADADOS ===
    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'usuario'
        indexes = [
            models.Index(fields=['tipo'], name='usuario_tipo_idx'),
        ]

    def pode_acessar_projeto(self, projeto):
        """Admin acessa tudo; os demais apenas projetos onde são membros"""
        if self.tipo == 'admin':
            return True
        return projeto.membros.filter(id=self.id).exists()

    def get_projetos_acessiveis(self):
        if self.tipo == 'admin':
            return Projeto.objects.filter(ativo=True)
        return Projeto.objects.filter(membros=self, ativo=True).distinct()

    def get_nome_exibicao(self):
        return self.get_full_name() or self.username

    def __str__(self):
        return self.get_nome_exibicao()


class Projeto(models.Model):
    """Projeto agrupa boards, membros e status customizados"""

    nome = models.CharField(max_length=200)
    cliente = models.CharField(max_length=200, blank=True)
    descricao = models.TextField(blank=True)

    criado_por = models.ForeignKey(
        Usuario,
        on_delete=models.PROTECT,
        related_name='projetos_criados'
    )
    membros = models.ManyToManyField(
        Usuario,
        related_name='projetos',
        blank=True
    )

    ativo = models.BooleanField(default=True)
    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'projeto'
        ordering = ['-criado_em']

    def __str__(self):
        return self.nome


class StatusProjeto(models.Model):
    """
    Status customizado de um projeto

    Quando um projeto define status próprios, os boards novos desse projeto
    ganham uma coluna por status, na ordem de `posicao`.
    """

    projeto = models.ForeignKey(Projeto, on_delete=models.CASCADE, related_name='statuses')
    nome = models.CharField(max_length=100)
    posicao = models.PositiveIntegerField()
    cor = models.CharField(max_length=7, default='#6B7280')

    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'status_projeto'
        ordering = ['posicao']
        constraints = [
            models.UniqueConstraint(fields=['projeto', 'nome'], name='status_projeto_nome_unico'),
            models.UniqueConstraint(fields=['projeto', 'posicao'], name='status_projeto_posicao_unica'),
        ]

    def __str__(self):
        return f"{self.projeto.nome} - {self.nome}"


class Board(models.Model):
    """Quadro Kanban de um projeto"""

    titulo = models.CharField(max_length=200)
    projeto = models.ForeignKey(Projeto, on_delete=models.CASCADE, related_name='boards')
    descricao = models.TextField(blank=True)
    ativo = models.BooleanField(default=True)
    criado_em = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'board'
        ordering = ['-criado_em']

    def __str__(self):
        return f"{self.projeto.nome} - {self.titulo}"

    def criar_colunas_padrao(self):
        """
        Cria as colunas iniciais do board

        Usa os status do projeto quando existirem; caso contrário as
        colunas padrão (A Fazer, Em Progresso, Em Revisão, Concluído).
        """
        statuses = list(self.projeto.statuses.order_by('posicao'))
        if statuses:
            definicoes = [(status.nome, status.cor) for status in statuses]
        else:
            definicoes = COLUNAS_PADRAO

        for ordem, (titulo, cor) in enumerate(definicoes):
            Coluna.objects.create(
                board=self,
                titulo=titulo,
                status_valor=titulo,
                ordem=ordem,
                cor=cor,
                limite_wip=settings.TRILHA_DEFAULT_WIP_LIMIT,
            )

    def reordenar_colunas(self, ids_ordenados):
        """
        Reescreve a ordem das colunas conforme a lista de ids recebida

        A unicidade de (board, ordem) exige duas fases: primeiro as colunas
        vão para posições temporárias fora do intervalo, depois para as
        posições finais.
        """
        colunas = {coluna.id: coluna for coluna in self.colunas.all()}
        ids_ordenados = [int(coluna_id) for coluna_id in ids_ordenados]

        if sorted(ids_ordenados) != sorted(colunas):
            raise ValidationError('A nova ordem deve conter todas as colunas do board')

        deslocamento = len(colunas) + 1000
        with transaction.atomic():
            for indice, coluna_id in enumerate(ids_ordenados):
                Coluna.objects.filter(id=coluna_id).update(ordem=deslocamento + indice)
            for indice, coluna_id in enumerate(ids_ordenados):
                Coluna.objects.filter(id=coluna_id).update(ordem=indice)

    def tarefas_ativas(self):
        return self.tarefas.filter(arquivado=False)


class Coluna(models.Model):
    """
    Coluna do Kanban

    Cada coluna representa um valor de status: as tarefas aparecem na
    coluna cujo `status_valor` é igual ao seu `status`.
    """

    titulo = models.CharField(max_length=100)
    board = models.ForeignKey(Board, on_delete=models.CASCADE, related_name='colunas')
    status_valor = models.CharField(max_length=100)
    ordem = models.PositiveIntegerField(default=0)
    limite_wip = models.PositiveIntegerField(
        default=0,
        help_text="Limite de trabalho em progresso (0 = sem limite)"
    )
    cor = models.CharField(max_length=7, default='#6B7280')

    class Meta:
        db_table = 'coluna'
        ordering = ['ordem']
        unique_together = ['board', 'ordem']

    def __str__(self):
        return f"{self.board.titulo} - {self.titulo}"

    def clean(self):
        if not (self.status_valor or '').strip() and not (self.titulo or '').strip():
            raise ValidationError({'status_valor': 'O status da coluna não pode ser vazio'})

    def save(self, *args, **kwargs):
        if not (self.status_valor or '').strip():
            self.status_valor = self.titulo
        super().save(*args, **kwargs)

    def tarefas(self):
        """Tarefas ativas desta coluna ordenadas pela posição no Kanban"""
        return Tarefa.objects.filter(
            board_id=self.board_id,
            status=self.status_valor,
            arquivado=False,
        ).order_by('posicao_kanban', 'id')

    def pode_adicionar_tarefa(self):
        """Verifica o limite WIP"""
        if self.limite_wip == 0:
            return True
        return self.tarefas().count() < self.limite_wip


class Tarefa(models.Model):
    """Tarefa exibida como cartão no Kanban"""

    PRIORIDADE_CHOICES = [
        ('baixa', 'Baixa'),
        ('media', 'Média'),
        ('alta', 'Alta'),
        ('critica', 'Crítica'),
    ]

    titulo = models.CharField(max_length=255)
    descricao = models.TextField(blank=True)
    notas = models.TextField(blank=True)

    board = models.ForeignKey(Board, on_delete=models.CASCADE, related_name='tarefas')
    status = models.CharField(max_length=100, default=STATUS_INICIAL, db_index=True)
    posicao_kanban = models.IntegerField(default=0)

    responsavel = models.ForeignKey(
        Usuario,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='tarefas_responsavel'
    )
    prioridade = models.CharField(max_length=10, choices=PRIORIDADE_CHOICES, default='media')
    prazo = models.DateField(null=True, blank=True)
    orcamento = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0'))]
    )

    arquivado = models.BooleanField(default=False)
    criado_por = models.ForeignKey(
        Usuario,
        on_delete=models.PROTECT,
        related_name='tarefas_criadas'
    )
    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'tarefa'
        ordering = ['posicao_kanban', '-criado_em']
        indexes = [
            models.Index(fields=['board', 'status'], name='tarefa_board_status_idx'),
        ]

    def __str__(self):
        return self.titulo

    @property
    def projeto(self):
        return self.board.projeto

    @property
    def coluna(self):
        return self.board.colunas.filter(status_valor=self.status).first()

    def esta_concluida(self):
        return self.status == STATUS_CONCLUIDO

    def esta_atrasado(self):
        if not self.prazo or self.esta_concluida():
            return False
        return self.prazo < timezone.localdate()

    def mover_para_coluna(self, nova_coluna, posicao=0):
        """
        Move a tarefa para outra coluna

        O status passa a ser o `status_valor` da coluna. Retorna False se o
        limite WIP da coluna de destino impedir a movimentação.
        """
        if nova_coluna.status_valor != self.status and not nova_coluna.pode_adicionar_tarefa():
            return False

        self.status = nova_coluna.status_valor
        self.posicao_kanban = posicao
        self.save(update_fields=['status', 'posicao_kanban', 'atualizado_em'])
        return True


class RegistroHora(models.Model):
    """
    Registro de tempo trabalhado (cronômetro)

    A duração é guardada em segundos; enquanto o cronômetro corre,
    `em_andamento` é verdadeiro e `fim` é nulo.
    """

    usuario = models.ForeignKey(Usuario, on_delete=models.CASCADE, related_name='registros_hora')
    tarefa = models.ForeignKey(
        Tarefa,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='registros_hora'
    )
    projeto = models.ForeignKey(
        Projeto,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='registros_hora'
    )
    descricao = models.TextField()
    inicio = models.DateTimeField()
    fim = models.DateTimeField(null=True, blank=True)
    duracao_segundos = models.PositiveIntegerField(default=0)
    em_andamento = models.BooleanField(default=False)
    criado_em = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'registro_hora'
        ordering = ['-inicio']
        constraints = [
            models.UniqueConstraint(
                fields=['usuario'],
                condition=Q(em_andamento=True),
                name='registro_hora_um_ativo_por_usuario',
            ),
        ]

    def __str__(self):
        return f"{self.usuario} - {self.descricao[:40]}"

    @property
    def duracao(self):
        """Duração em horas"""
        return round(self.duracao_segundos / 3600, 2)

    def clean(self):
        if not (self.descricao or '').strip():
            raise ValidationError({'descricao': 'Descrição é obrigatória'})
        if self.fim and self.inicio and self.fim <= self.inicio:
            raise ValidationError('Data/hora fim deve ser posterior ao início')


class Notificacao(models.Model):
    """Notificação entregue a um usuário (lista + push em tempo real)"""

    TIPO_CHOICES = [
        ('task', 'Tarefa'),
        ('comment', 'Comentário'),
        ('mention', 'Menção'),
        ('due_date', 'Prazo'),
        ('assignment', 'Atribuição'),
        ('project', 'Projeto'),
        ('system', 'Sistema'),
    ]

    usuario = models.ForeignKey(Usuario, on_delete=models.CASCADE, related_name='notificacoes')
    titulo = models.CharField(max_length=200)
    mensagem = models.TextField()
    tipo = models.CharField(max_length=20, choices=TIPO_CHOICES, default='system')
    lida = models.BooleanField(default=False)
    dados = models.JSONField(default=dict, blank=True)
    criado_em = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = 'notificacao'
        ordering = ['-criado_em']
        indexes = [
            models.Index(fields=['usuario', 'lida'], name='notificacao_usuario_lida_idx'),
        ]

    def __str__(self):
        return f"{self.usuario}: {self.titulo}"

    def para_dict(self):
        return {
            'id': self.id,
            'titulo': self.titulo,
            'mensagem': self.mensagem,
            'tipo': self.tipo,
            'lida': self.lida,
            'dados': self.dados,
            'criado_em': self.criado_em.isoformat() if self.criado_em else None,
        }
