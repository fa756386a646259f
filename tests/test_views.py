# tests/test_views.py

import json
from datetime import timedelta

import pytest
from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.urls import reverse
from django.utils import timezone

from apps.core.models import Notificacao, Tarefa

pytestmark = pytest.mark.django_db


def post_json(client, url, dados):
    return client.post(url, data=json.dumps(dados), content_type='application/json')


class TestPainel:

    def test_exige_login(self, client):
        response = client.get(reverse('core:painel'))
        assert response.status_code == 302
        assert reverse('core:login') in response.url

    def test_painel(self, client, dev, tarefa):
        client.force_login(dev)
        response = client.get(reverse('core:painel'))

        assert response.status_code == 200
        assert response.context['stats']['tarefas_abertas'] == 1
        assert list(response.context['projetos']) == [tarefa.board.projeto]

    def test_api_estatisticas(self, client, dev, tarefa):
        client.force_login(dev)
        dados = client.get(reverse('core:api_stats_painel')).json()
        assert dados['tarefas_abertas'] == 1
        assert dados['cronometro_ativo'] is False

    def test_health(self, client, db):
        response = client.get(reverse('core:health'))
        assert response.status_code == 200
        assert response.json()['status'] == 'healthy'


class TestKanban:

    def test_kanban(self, client, dev, tarefa):
        client.force_login(dev)
        response = client.get(reverse('board:kanban', args=[tarefa.board_id]))

        assert response.status_code == 200
        colunas = response.context['colunas_com_tarefas']
        assert len(colunas) == 4
        assert colunas[0][1] == [tarefa]
        assert response.context['websocket_group'] == f'board_{tarefa.board_id}'

    def test_kanban_sem_acesso(self, client, estranho, board):
        client.force_login(estranho)
        response = client.get(reverse('board:kanban', args=[board.id]))
        assert response.status_code == 302
        assert response.url == reverse('core:painel')

    def test_mover_tarefa(self, client, dev, tarefa, board):
        client.force_login(dev)
        destino = board.colunas.get(titulo='Em Progresso')

        response = post_json(client, reverse('board:mover_tarefa'), {
            'tarefa_id': tarefa.id, 'coluna_id': destino.id, 'posicao': 2,
        })

        assert response.json()['success']
        tarefa.refresh_from_db()
        assert (tarefa.status, tarefa.posicao_kanban) == ('Em Progresso', 2)

    def test_mover_tarefa_sem_permissao(self, client, estranho, tarefa, board):
        client.force_login(estranho)
        destino = board.colunas.get(titulo='Concluído')
        response = post_json(client, reverse('board:mover_tarefa'), {
            'tarefa_id': tarefa.id, 'coluna_id': destino.id,
        })
        assert response.status_code == 403

    def test_mover_tarefa_json_invalido(self, client, dev):
        client.force_login(dev)
        response = client.post(reverse('board:mover_tarefa'), data='{', content_type='application/json')
        assert response.status_code == 400

    def test_reordenar_colunas(self, client, gerente, board):
        client.force_login(gerente)
        ids = list(board.colunas.order_by('ordem').values_list('id', flat=True))
        novos = ids[1:] + ids[:1]

        response = post_json(client, reverse('board:reordenar_colunas', args=[board.id]), {'colunas': novos})

        assert response.json()['success']
        assert list(board.colunas.order_by('ordem').values_list('id', flat=True)) == novos

    def test_reordenar_colunas_funcionario(self, client, dev, board):
        client.force_login(dev)
        ids = list(board.colunas.values_list('id', flat=True))
        response = post_json(client, reverse('board:reordenar_colunas', args=[board.id]), {'colunas': ids})
        assert response.status_code == 403

    def test_criar_tarefa(self, client, gerente, dev, board):
        client.force_login(gerente)
        prazo = timezone.localdate() + timedelta(days=5)

        response = client.post(reverse('board:criar_tarefa', args=[board.id]), {
            'titulo': 'Página de contato',
            'descricao': '',
            'status': 'Em Progresso',
            'responsavel': dev.id,
            'prioridade': 'alta',
            'prazo': prazo.isoformat(),
        })

        assert response.status_code == 302
        tarefa = Tarefa.objects.get(titulo='Página de contato')
        assert tarefa.status == 'Em Progresso'
        assert tarefa.criado_por == gerente

    def test_criar_tarefa_invalida(self, client, gerente, board):
        client.force_login(gerente)
        response = client.post(
            reverse('board:criar_tarefa', args=[board.id]),
            {'titulo': '   ', 'status': 'A Fazer', 'prioridade': 'media'},
            HTTP_HX_REQUEST='true',
        )
        assert response.status_code == 400
        assert 'titulo' in response.json()['errors']

    def test_detalhes_tarefa(self, client, dev, tarefa):
        client.force_login(dev)
        dados = client.get(reverse('board:detalhes_tarefa', args=[tarefa.id])).json()

        assert dados['campos']['responsavel']['valor'] == str(dev.id)
        assert dados['campos']['prazo']['tipo'] == 'date'
        assert dados['pode_editar']
        assert dados['pode_registrar_hora']

    def test_salvar_campo(self, client, dev, tarefa):
        client.force_login(dev)
        response = post_json(client, reverse('board:salvar_campo', args=[tarefa.id]), {
            'campo': 'prioridade', 'valor': 'critica',
        })

        assert response.json() == {'success': True, 'campo': 'prioridade', 'valor': 'critica'}
        tarefa.refresh_from_db()
        assert tarefa.prioridade == 'critica'

    def test_salvar_campo_invalido(self, client, dev, tarefa):
        client.force_login(dev)
        response = post_json(client, reverse('board:salvar_campo', args=[tarefa.id]), {
            'campo': 'prioridade', 'valor': 'urgentissima',
        })
        assert response.json() == {'success': False, 'error': 'Prioridade inválida'}

    def test_salvar_campo_avisa_o_board(self, client, dev, tarefa):
        channel_layer = get_channel_layer()
        canal = async_to_sync(channel_layer.new_channel)()
        async_to_sync(channel_layer.group_add)(f'board_{tarefa.board_id}', canal)

        client.force_login(dev)
        response = post_json(client, reverse('board:salvar_campo', args=[tarefa.id]), {
            'campo': 'titulo', 'valor': '  Landing nova  ',
        })
        assert response.json()['valor'] == 'Landing nova'

        evento = async_to_sync(channel_layer.receive)(canal)
        assert evento['type'] == 'campo_atualizado'
        mensagem = evento['message']
        assert mensagem['valor'] == 'Landing nova'
        assert mensagem['user_id'] == dev.id
        assert mensagem['usuario'] == dev.get_nome_exibicao()
        assert 'usuario_id' not in mensagem

    def test_buscar_tarefas(self, client, dev, tarefa, board, gerente):
        Tarefa.objects.create(titulo='Rodapé', board=board, criado_por=gerente)
        client.force_login(dev)
        url = reverse('board:buscar_tarefas', args=[board.id])

        assert client.get(url, {'q': 'landing'}).json()['total'] == 1
        sem_responsavel = client.get(url, {'responsavel': 'unassigned'}).json()
        assert [t['titulo'] for t in sem_responsavel['resultados']] == ['Rodapé']


class TestCronometroViews:

    def test_ciclo(self, client, dev, tarefa):
        client.force_login(dev)

        iniciar = client.post(reverse('board:iniciar_cronometro'), {
            'descricao': 'Implementar', 'tarefa_id': tarefa.id,
        }).json()
        assert iniciar['success']

        estado = client.get(reverse('board:status_cronometro')).json()
        assert estado['ativo']
        assert estado['tarefa_id'] == tarefa.id

        parar = client.post(reverse('board:parar_cronometro')).json()
        assert parar['success']
        assert parar['registro_id'] == iniciar['registro_id']

    def test_apenas_responsavel_registra_horas(self, client, gerente, tarefa):
        client.force_login(gerente)
        response = client.post(reverse('board:iniciar_cronometro'), {
            'descricao': 'Revisar', 'tarefa_id': tarefa.id,
        }).json()
        assert not response['success']

    def test_parar_sem_cronometro(self, client, dev):
        client.force_login(dev)
        assert client.post(reverse('board:parar_cronometro')).json()['success'] is False


class TestNotificacoesViews:

    def test_listar_com_filtros(self, client, dev, tarefa):
        Notificacao.objects.filter(usuario=dev, tipo='project').update(lida=True)
        client.force_login(dev)
        url = reverse('core:notificacoes')

        todas = client.get(url).json()
        nao_lidas = client.get(url, {'filtro': 'unread'}).json()
        hoje = client.get(url, {'filtro': 'today'}).json()

        assert len(todas['notificacoes']) == 2
        assert [n['tipo'] for n in nao_lidas['notificacoes']] == ['assignment']
        assert len(hoje['notificacoes']) == 2
        assert todas['nao_lidas'] == 1

    def test_filtro_invalido(self, client, dev):
        client.force_login(dev)
        assert client.get(reverse('core:notificacoes'), {'filtro': 'ontem'}).status_code == 400

    def test_marcar_lida_e_excluir(self, client, dev, tarefa):
        client.force_login(dev)
        notificacao = Notificacao.objects.filter(usuario=dev).first()

        client.post(reverse('core:marcar_notificacao_lida', args=[notificacao.id]))
        notificacao.refresh_from_db()
        assert notificacao.lida

        client.post(reverse('core:excluir_notificacao', args=[notificacao.id]))
        assert not Notificacao.objects.filter(id=notificacao.id).exists()

    def test_marcar_todas(self, client, dev, tarefa):
        client.force_login(dev)
        assert client.post(reverse('core:marcar_todas_lidas')).json()['marcadas'] == 2
        assert client.get(reverse('core:notificacoes_nao_lidas')).json() == {'nao_lidas': 0}

    def test_notificacao_de_outro_usuario(self, client, gerente, dev, tarefa):
        client.force_login(gerente)
        notificacao = Notificacao.objects.filter(usuario=dev).first()
        response = client.post(reverse('core:marcar_notificacao_lida', args=[notificacao.id]))
        assert response.status_code == 404


class TestTemaView:

    def test_htmx_recebe_json(self, client, dev):
        client.force_login(dev)
        response = client.post(reverse('core:salvar_tema'), {'modo': 'dark', 'cor': 'purple'}, HTTP_HX_REQUEST='true')

        assert response.json()['aplicado']['classes'] == 'dark theme-purple'
        dev.refresh_from_db()
        assert (dev.modo_tema, dev.cor_tema) == ('dark', 'purple')

    def test_formulario_comum_redireciona(self, client, dev):
        client.force_login(dev)
        response = client.post(reverse('core:salvar_tema'), {'modo': 'light', 'cor': 'red'})
        assert response.status_code == 302

    def test_tema_invalido(self, client, dev):
        client.force_login(dev)
        response = client.post(reverse('core:salvar_tema'), {'modo': 'neon', 'cor': 'red'}, HTTP_HX_REQUEST='true')
        assert response.status_code == 400

    def test_tema_no_contexto(self, client, dev, tarefa):
        dev.modo_tema = 'dark'
        dev.save()
        client.force_login(dev)
        response = client.get(reverse('core:painel'))
        assert response.context['tema']['classes'] == 'dark'
        assert b'class="dark"' in response.content
