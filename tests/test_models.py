# tests/test_models.py

from datetime import timedelta

import pytest
from django.core.exceptions import ValidationError
from django.utils import timezone

from apps.core.models import (
    Board, Coluna, Notificacao, Projeto, RegistroHora, StatusProjeto, Tarefa,
)

pytestmark = pytest.mark.django_db


class TestBoard:

    def test_colunas_padrao(self, board):
        colunas = list(board.colunas.order_by('ordem'))

        assert [c.titulo for c in colunas] == ['A Fazer', 'Em Progresso', 'Em Revisão', 'Concluído']
        assert all(c.status_valor == c.titulo for c in colunas)
        assert [c.ordem for c in colunas] == [0, 1, 2, 3]

    def test_colunas_dos_status_do_projeto(self, gerente):
        projeto = Projeto.objects.create(nome='Suporte', criado_por=gerente)
        StatusProjeto.objects.create(projeto=projeto, nome='Triagem', posicao=1, cor='#111111')
        StatusProjeto.objects.create(projeto=projeto, nome='Resolvido', posicao=2)

        board = Board.objects.create(titulo='Fila', projeto=projeto)

        assert list(board.colunas.values_list('titulo', 'cor')) == [
            ('Triagem', '#111111'), ('Resolvido', '#6B7280')
        ]

    def test_reordenar_colunas(self, board):
        ids = list(board.colunas.order_by('ordem').values_list('id', flat=True))

        board.reordenar_colunas(list(reversed(ids)))

        assert list(board.colunas.order_by('ordem').values_list('id', flat=True)) == list(reversed(ids))

    def test_reordenar_exige_todas_as_colunas(self, board):
        ids = list(board.colunas.values_list('id', flat=True))
        with pytest.raises(ValidationError):
            board.reordenar_colunas(ids[:-1])

    def test_coluna_sem_status_usa_titulo(self, board):
        coluna = Coluna.objects.create(board=board, titulo='Bloqueado', ordem=10)
        assert coluna.status_valor == 'Bloqueado'


class TestTarefa:

    def test_status_inicial(self, tarefa):
        assert tarefa.status == 'A Fazer'
        assert tarefa.coluna.titulo == 'A Fazer'

    def test_mover_para_coluna(self, tarefa, board):
        destino = board.colunas.get(titulo='Em Revisão')

        assert tarefa.mover_para_coluna(destino, 3)

        tarefa.refresh_from_db()
        assert tarefa.status == 'Em Revisão'
        assert tarefa.posicao_kanban == 3

    def test_limite_wip(self, tarefa, board, gerente):
        destino = board.colunas.get(titulo='Em Progresso')
        destino.limite_wip = 1
        destino.save()
        Tarefa.objects.create(titulo='Ocupando', board=board, status='Em Progresso', criado_por=gerente)

        assert not tarefa.mover_para_coluna(destino)
        tarefa.refresh_from_db()
        assert tarefa.status == 'A Fazer'

    def test_atrasada(self, tarefa):
        tarefa.prazo = timezone.localdate() - timedelta(days=2)
        assert tarefa.esta_atrasado()

        tarefa.status = 'Concluído'
        assert not tarefa.esta_atrasado()

    def test_responsavel_vira_membro(self, board, gerente, estranho):
        Tarefa.objects.create(titulo='Externa', board=board, responsavel=estranho, criado_por=gerente)
        assert board.projeto.membros.filter(id=estranho.id).exists()


class TestNotificacoesAutomaticas:

    def test_atribuicao_notifica_responsavel(self, tarefa, dev):
        notificacao = Notificacao.objects.filter(usuario=dev, tipo='assignment').get()
        assert notificacao.dados == {'tarefa_id': tarefa.id, 'board_id': tarefa.board_id}

    def test_mesmo_responsavel_nao_notifica_de_novo(self, tarefa, dev):
        tarefa.titulo = 'Outro título'
        tarefa.save()
        assert Notificacao.objects.filter(usuario=dev, tipo='assignment').count() == 1

    def test_novo_membro_e_notificado(self, projeto, gerente, dev):
        assert Notificacao.objects.filter(usuario=dev, tipo='project').exists()
        assert not Notificacao.objects.filter(usuario=gerente, tipo='project').exists()


class TestRegistroHora:

    def test_duracao_calculada_ao_finalizar(self, dev):
        inicio = timezone.now() - timedelta(minutes=90)
        registro = RegistroHora.objects.create(
            usuario=dev, descricao='Layout', inicio=inicio, em_andamento=True
        )

        registro.fim = inicio + timedelta(minutes=90)
        registro.save()

        assert registro.duracao_segundos == 5400
        assert registro.duracao == 1.5
        assert not registro.em_andamento

    def test_fim_antes_do_inicio(self, dev):
        agora = timezone.now()
        registro = RegistroHora(usuario=dev, descricao='x', inicio=agora, fim=agora - timedelta(seconds=1))
        with pytest.raises(ValidationError):
            registro.clean()
