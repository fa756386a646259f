# tests/test_realtime.py

import pytest

from apps.core.models import Notificacao
from apps.core.realtime import CanalRealtime, canal_notificacoes, grupo_usuario


class TestCanalRealtime:

    def test_inscrever_e_cancelar(self):
        canal = CanalRealtime()
        recebidos = []
        inscricao = canal.inscrever('user_1', recebidos.append)

        assert canal.publicar('user_1', {'n': 1}) == 1
        inscricao.cancelar()
        inscricao.cancelar()

        assert canal.publicar('user_1', {'n': 2}) == 0
        assert recebidos == [{'n': 1}]
        assert canal.total_inscritos('user_1') == 0

    def test_chaves_sao_isoladas(self):
        canal = CanalRealtime()
        recebidos = []
        canal.inscrever('user_1', recebidos.append)

        canal.publicar('user_2', {'n': 1})
        assert recebidos == []

    def test_inscrito_com_erro_nao_bloqueia_os_demais(self):
        canal = CanalRealtime()
        recebidos = []

        def quebrado(evento):
            raise RuntimeError('falhou')

        canal.inscrever('user_1', quebrado)
        canal.inscrever('user_1', recebidos.append)

        assert canal.publicar('user_1', {'n': 1}) == 1
        assert recebidos == [{'n': 1}]

    def test_gerenciador_de_contexto(self):
        canal = CanalRealtime()
        with canal.inscrever('user_1', lambda evento: None) as inscricao:
            assert canal.total_inscritos('user_1') == 1
        assert not inscricao.ativa
        assert canal.total_inscritos('user_1') == 0


@pytest.mark.django_db
def test_nova_notificacao_e_publicada(dev):
    eventos = []
    with canal_notificacoes.inscrever(grupo_usuario(dev.id), eventos.append):
        notificacao = Notificacao.objects.create(
            usuario=dev, titulo='Prazo', mensagem='Vence amanhã', tipo='due_date'
        )

        notificacao.lida = True
        notificacao.save()

    assert len(eventos) == 1
    assert eventos[0]['event'] == 'INSERT'
    assert eventos[0]['table'] == 'notificacao'
    assert eventos[0]['new']['id'] == notificacao.id
    assert eventos[0]['new']['tipo'] == 'due_date'
