# apps/board/status.py

"""
Mapeamento entre colunas do Kanban e status das tarefas

Uma coluna exibe as tarefas cujo status é igual ao seu `status_valor`;
colunas sem `status_valor` usam o próprio título.
"""

from typing import Dict, Iterable, List, Tuple


def status_da_coluna(coluna) -> str:
    return (getattr(coluna, 'status_valor', '') or '').strip() or coluna.titulo


def obter_status_da_coluna(titulo_coluna: str, colunas: Iterable) -> str:
    """Status correspondente ao título da coluna (o próprio título se não achar)"""
    for coluna in colunas:
        if coluna.titulo == titulo_coluna:
            return status_da_coluna(coluna)
    return titulo_coluna


def obter_coluna_do_status(status: str, colunas: Iterable):
    """Coluna que exibe o status, ou None"""
    for coluna in colunas:
        if status_da_coluna(coluna) == status:
            return coluna
    return None


def criar_mapeamento_status(colunas: Iterable) -> Tuple[Dict[str, str], Dict[str, str]]:
    """(status -> título da coluna, título da coluna -> status)"""
    status_para_coluna = {}
    coluna_para_status = {}
    for coluna in colunas:
        status = status_da_coluna(coluna)
        status_para_coluna[status] = coluna.titulo
        coluna_para_status[coluna.titulo] = status
    return status_para_coluna, coluna_para_status


def tarefas_da_coluna(tarefas: Iterable, coluna) -> List:
    """Tarefas da coluna ordenadas pela posição no Kanban"""
    status = status_da_coluna(coluna)
    return sorted(
        (tarefa for tarefa in tarefas if tarefa.status == status),
        key=lambda tarefa: (tarefa.posicao_kanban or 0, tarefa.id or 0),
    )


def agrupar_por_coluna(tarefas: Iterable, colunas: Iterable) -> List[Tuple[object, List]]:
    """
    Lista (coluna, tarefas) na ordem das colunas

    Tarefas com status sem coluna correspondente ficam de fora.
    """
    tarefas = list(tarefas)
    return [(coluna, tarefas_da_coluna(tarefas, coluna)) for coluna in colunas]


def tarefas_sem_coluna(tarefas: Iterable, colunas: Iterable) -> List:
    validos = {status_da_coluna(coluna) for coluna in colunas}
    return [tarefa for tarefa in tarefas if tarefa.status not in validos]

