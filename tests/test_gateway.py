# tests/test_gateway.py

from datetime import timedelta
from decimal import Decimal

import pytest
from asgiref.sync import async_to_sync
from django.utils import timezone

from apps.board.edicao_inline import IdentidadeCampo, ResultadoCommit, SELECAO, USUARIO
from apps.board.gateway import (
    SEM_RESPONSAVEL,
    GatewayTarefa,
    converter_orcamento,
    montar_campo,
    validar_prazo,
    validar_titulo,
    valor_para_cliente,
)
from apps.core.models import Tarefa

pytestmark = pytest.mark.django_db


def salvar(usuario, tarefa, campo, valor):
    return GatewayTarefa(usuario).salvar(IdentidadeCampo(tarefa.id, campo), valor)


class TestValidadores:

    def test_titulo(self):
        assert validar_titulo('  ') == 'O título é obrigatório'
        assert validar_titulo('x' * 256) is not None
        assert validar_titulo('Ok') is None

    def test_prazo(self):
        ontem = timezone.localdate() - timedelta(days=1)
        assert validar_prazo(ontem.isoformat()) == 'O prazo não pode estar no passado'
        assert validar_prazo('31/12/2030') == 'Data inválida'
        assert validar_prazo('') is None

    def test_orcamento_aceita_virgula(self):
        assert converter_orcamento('10,5') == Decimal('10.50')
        with pytest.raises(ValueError):
            converter_orcamento('dez reais')


class TestGatewayTarefa:

    def test_grava_titulo(self, tarefa, dev):
        assert salvar(dev, tarefa, 'titulo', '  Nova landing  ') == ResultadoCommit.ok('Nova landing')
        tarefa.refresh_from_db()
        assert tarefa.titulo == 'Nova landing'

    def test_titulo_vazio_falha(self, tarefa, dev):
        resultado = salvar(dev, tarefa, 'titulo', '')
        assert not resultado.sucesso
        assert resultado.mensagem == 'O título é obrigatório'

    def test_usuario_fora_do_projeto_nao_grava(self, tarefa, estranho):
        resultado = salvar(estranho, tarefa, 'titulo', 'Invasão')
        assert resultado.mensagem == 'Você não tem permissão para editar esta tarefa'
        tarefa.refresh_from_db()
        assert tarefa.titulo == 'Landing page'

    def test_campo_nao_editavel(self, tarefa, dev):
        assert not salvar(dev, tarefa, 'criado_por', 1).sucesso

    def test_tarefa_inexistente(self, dev):
        resultado = GatewayTarefa(dev).salvar(IdentidadeCampo(999999, 'titulo'), 'x')
        assert resultado.mensagem == 'Tarefa não encontrada'

    def test_status_deve_existir_no_board(self, tarefa, dev):
        assert salvar(dev, tarefa, 'status', 'Arquivado').mensagem == 'Status inválido para este board'
        assert salvar(dev, tarefa, 'status', 'Em Progresso').sucesso
        tarefa.refresh_from_db()
        assert tarefa.status == 'Em Progresso'

    def test_sem_responsavel(self, tarefa, gerente):
        assert salvar(gerente, tarefa, 'responsavel', SEM_RESPONSAVEL).sucesso
        tarefa.refresh_from_db()
        assert tarefa.responsavel_id is None

    def test_responsavel_precisa_ser_membro(self, tarefa, gerente, estranho):
        resultado = salvar(gerente, tarefa, 'responsavel', str(estranho.id))
        assert resultado.mensagem == 'O responsável deve ser membro do projeto'

    def test_prazo_e_orcamento(self, tarefa, dev):
        amanha = timezone.localdate() + timedelta(days=1)
        assert salvar(dev, tarefa, 'prazo', amanha.isoformat()).sucesso
        assert salvar(dev, tarefa, 'orcamento', '1500,00').sucesso
        assert not salvar(dev, tarefa, 'orcamento', '-1').sucesso

        tarefa.refresh_from_db()
        assert tarefa.prazo == amanha
        assert tarefa.orcamento == Decimal('1500.00')

    def test_limpar_prazo(self, tarefa, dev):
        tarefa.prazo = timezone.localdate()
        tarefa.save()
        assert salvar(dev, tarefa, 'prazo', '').sucesso
        tarefa.refresh_from_db()
        assert tarefa.prazo is None

    def test_status_respeita_limite_wip(self, tarefa, board, gerente):
        destino = board.colunas.get(titulo='Em Progresso')
        destino.limite_wip = 1
        destino.save()
        Tarefa.objects.create(titulo='Ocupando', board=board, status='Em Progresso', criado_por=gerente)

        resultado = salvar(gerente, tarefa, 'status', 'Em Progresso')

        assert not resultado.sucesso
        assert resultado.mensagem == 'Limite WIP da coluna Em Progresso atingido (1)'
        tarefa.refresh_from_db()
        assert tarefa.status == 'A Fazer'
        assert destino.tarefas().count() == 1

    def test_status_atual_nao_conta_no_limite(self, tarefa, board):
        origem = board.colunas.get(titulo='A Fazer')
        origem.limite_wip = 1
        origem.save()

        assert salvar(tarefa.responsavel, tarefa, 'status', 'A Fazer').sucesso

    def test_devolve_valor_normalizado(self, tarefa, dev):
        assert salvar(dev, tarefa, 'orcamento', '10').valor == '10.00'
        assert salvar(dev, tarefa, 'responsavel', '').valor == SEM_RESPONSAVEL

    def test_commit_assincrono(self, tarefa, dev):
        gateway = GatewayTarefa(dev)
        resultado = async_to_sync(gateway.commit)(IdentidadeCampo(tarefa.id, 'notas'), 'Revisar copy')

        assert resultado.sucesso
        assert Tarefa.objects.get(id=tarefa.id).notas == 'Revisar copy'


class TestMontarCampo:

    def test_responsavel(self, tarefa, dev):
        campo = montar_campo(tarefa, 'responsavel')

        assert campo.tipo == USUARIO
        assert campo.valor_atual == str(dev.id)
        assert campo.opcoes[0]['valor'] == SEM_RESPONSAVEL
        assert {opcao['valor'] for opcao in campo.opcoes[1:]} == {
            str(m.id) for m in tarefa.board.projeto.membros.all()
        }

    def test_status_usa_colunas_do_board(self, tarefa):
        campo = montar_campo(tarefa, 'status')
        assert campo.tipo == SELECAO
        assert [opcao['valor'] for opcao in campo.opcoes] == [
            'A Fazer', 'Em Progresso', 'Em Revisão', 'Concluído'
        ]
        assert campo.validar() is None

    def test_valor_para_cliente_sem_prazo(self, tarefa):
        assert valor_para_cliente(tarefa, 'prazo') == ''
        assert valor_para_cliente(tarefa, 'orcamento') == ''

    def test_campo_desconhecido(self, tarefa):
        with pytest.raises(KeyError):
            montar_campo(tarefa, 'arquivado')
