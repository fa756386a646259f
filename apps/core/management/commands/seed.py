# apps/core/management/commands/seed.py

from datetime import timedelta

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from apps.core.models import Board, Projeto, Tarefa, Usuario

USUARIOS_DEMO = [
    # username, senha, tipo, nome, sobrenome
    ('admin', 'admin123', 'admin', 'Ana', 'Administradora'),
    ('gerente', 'gerente123', 'gerente', 'Gabriel', 'Gerente'),
    ('dev', 'dev123', 'funcionario', 'Diana', 'Dev'),
]

TAREFAS_DEMO = [
    # titulo, status, prioridade, dias até o prazo
    ('Configurar ambiente de staging', 'A Fazer', 'alta', 3),
    ('Revisar fluxo de cadastro', 'A Fazer', 'media', 7),
    ('Edição inline dos cartões', 'Em Progresso', 'critica', 1),
    ('Notificações em tempo real', 'Em Revisão', 'alta', 2),
    ('Tema escuro', 'Concluído', 'baixa', None),
]


class Command(BaseCommand):
    help = 'Popula o banco com usuários, projeto, board e tarefas de demonstração'

    def add_arguments(self, parser):
        parser.add_argument(
            '--limpar',
            action='store_true',
            help='Remove o projeto de demonstração antes de recriar',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write('🌱 Criando dados de demonstração...')

        usuarios = {}
        for username, senha, tipo, nome, sobrenome in USUARIOS_DEMO:
            usuario, criado = Usuario.objects.get_or_create(
                username=username,
                defaults={
                    'tipo': tipo,
                    'first_name': nome,
                    'last_name': sobrenome,
                    'email': f'{username}@trilha.com.br',
                    'is_staff': tipo == 'admin',
                    'is_superuser': tipo == 'admin',
                },
            )
            if criado:
                usuario.set_password(senha)
                usuario.save()
                self.stdout.write(f'  👤 Usuário {username} criado ({tipo})')
            usuarios[tipo] = usuario

        if options['limpar']:
            Projeto.objects.filter(nome='Projeto Demo').delete()

        projeto, criado = Projeto.objects.get_or_create(
            nome='Projeto Demo',
            defaults={
                'cliente': 'Trilha',
                'descricao': 'Projeto de demonstração do Trilha Board',
                'criado_por': usuarios['gerente'],
            },
        )
        if not criado:
            self.stdout.write(self.style.WARNING('⚠️  Projeto Demo já existe; use --limpar para recriar'))
            return

        projeto.membros.add(*usuarios.values())

        # As colunas padrão são criadas pelo sinal post_save do Board
        board = Board.objects.create(titulo='Sprint 1', projeto=projeto)

        hoje = timezone.localdate()
        for posicao, (titulo, status, prioridade, dias) in enumerate(TAREFAS_DEMO):
            Tarefa.objects.create(
                titulo=titulo,
                board=board,
                status=status,
                posicao_kanban=posicao,
                prioridade=prioridade,
                prazo=hoje + timedelta(days=dias) if dias is not None else None,
                responsavel=usuarios['funcionario'],
                criado_por=usuarios['gerente'],
            )

        self.stdout.write(
            self.style.SUCCESS(
                f'✅ Dados criados: board "{board.titulo}" com '
                f'{board.colunas.count()} colunas e {len(TAREFAS_DEMO)} tarefas'
            )
        )
