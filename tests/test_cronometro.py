# tests/test_cronometro.py

from datetime import timedelta

import pytest

from apps.core.cronometro import ServicoCronometro
from apps.core.models import RegistroHora
from apps.core.utils import formatar_duracao


@pytest.mark.parametrize('segundos, esperado', [
    (3723, '1h 2m 3s'),
    (123, '2m 3s'),
    (5, '5s'),
    (None, '0s'),
])
def test_formatar_duracao(segundos, esperado):
    assert formatar_duracao(segundos) == esperado


@pytest.mark.django_db
class TestServicoCronometro:

    def test_descricao_obrigatoria(self, dev):
        with pytest.raises(ValueError, match='Descrição é obrigatória'):
            ServicoCronometro(dev).iniciar('   ')

    def test_iniciar_com_tarefa_guarda_projeto(self, dev, tarefa):
        registro = ServicoCronometro(dev).iniciar('Implementar hero', tarefa=tarefa)

        assert registro.em_andamento
        assert registro.projeto_id == tarefa.board.projeto_id

    def test_iniciar_para_o_cronometro_anterior(self, dev):
        servico = ServicoCronometro(dev)
        primeiro = servico.iniciar('Primeiro')
        segundo = servico.iniciar('Segundo')

        primeiro.refresh_from_db()
        assert not primeiro.em_andamento
        assert primeiro.fim is not None
        assert servico.registro_ativo() == segundo
        assert RegistroHora.objects.filter(usuario=dev, em_andamento=True).count() == 1

    def test_parar_sem_cronometro(self, dev):
        assert ServicoCronometro(dev).parar() is None

    def test_tempo_decorrido(self, dev):
        servico = ServicoCronometro(dev)
        assert servico.tempo_decorrido() == 0

        registro = servico.iniciar('Reunião')
        assert servico.tempo_decorrido(agora=registro.inicio + timedelta(seconds=90.7)) == 90

    def test_estado(self, dev):
        servico = ServicoCronometro(dev)
        assert servico.estado() == {'ativo': False}

        registro = servico.iniciar('Revisão')
        estado = servico.estado()
        assert estado['ativo']
        assert estado['registro_id'] == registro.id
        assert estado['descricao'] == 'Revisão'
