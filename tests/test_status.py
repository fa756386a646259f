# tests/test_status.py

from types import SimpleNamespace

from apps.board.status import (
    agrupar_por_coluna,
    criar_mapeamento_status,
    obter_coluna_do_status,
    obter_status_da_coluna,
    status_da_coluna,
    tarefas_sem_coluna,
)


def coluna(titulo, status_valor=''):
    return SimpleNamespace(titulo=titulo, status_valor=status_valor)


def tarefa(id, status, posicao=0):
    return SimpleNamespace(id=id, status=status, posicao_kanban=posicao)


COLUNAS = [coluna('Backlog', 'A Fazer'), coluna('Fazendo', 'Em Progresso'), coluna('Pronto')]


def test_coluna_sem_status_usa_titulo():
    assert status_da_coluna(coluna('Pronto')) == 'Pronto'
    assert status_da_coluna(coluna('Pronto', '   ')) == 'Pronto'


def test_status_da_coluna_pelo_titulo():
    assert obter_status_da_coluna('Fazendo', COLUNAS) == 'Em Progresso'
    assert obter_status_da_coluna('Inexistente', COLUNAS) == 'Inexistente'


def test_coluna_do_status():
    assert obter_coluna_do_status('A Fazer', COLUNAS).titulo == 'Backlog'
    assert obter_coluna_do_status('Bloqueado', COLUNAS) is None


def test_mapeamento_nos_dois_sentidos():
    status_para_coluna, coluna_para_status = criar_mapeamento_status(COLUNAS)
    assert status_para_coluna['Em Progresso'] == 'Fazendo'
    assert coluna_para_status['Pronto'] == 'Pronto'


def test_agrupa_na_ordem_das_colunas_e_da_posicao():
    tarefas = [
        tarefa(1, 'A Fazer', 2),
        tarefa(2, 'A Fazer', 0),
        tarefa(3, 'Pronto', 0),
        tarefa(4, 'Bloqueado', 0),
        tarefa(5, 'A Fazer', 0),
    ]

    grupos = agrupar_por_coluna(tarefas, COLUNAS)

    assert [c.titulo for c, _ in grupos] == ['Backlog', 'Fazendo', 'Pronto']
    assert [t.id for t in grupos[0][1]] == [2, 5, 1]
    assert grupos[1][1] == []
    assert [t.id for t in tarefas_sem_coluna(tarefas, COLUNAS)] == [4]
