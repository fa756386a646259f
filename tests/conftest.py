# tests/conftest.py

import pytest

from apps.core.models import Board, Projeto, Tarefa, Usuario


@pytest.fixture
def admin(db):
    return Usuario.objects.create_user('admin', password='senha123', tipo='admin')


@pytest.fixture
def gerente(db):
    return Usuario.objects.create_user(
        'gerente', password='senha123', tipo='gerente', first_name='Gabriel'
    )


@pytest.fixture
def dev(db):
    return Usuario.objects.create_user(
        'dev', password='senha123', tipo='funcionario', first_name='Diana'
    )


@pytest.fixture
def estranho(db):
    """Funcionário que não participa do projeto"""
    return Usuario.objects.create_user('estranho', password='senha123', tipo='funcionario')


@pytest.fixture
def projeto(gerente, dev):
    projeto = Projeto.objects.create(nome='Site Institucional', criado_por=gerente)
    projeto.membros.add(gerente, dev)
    return projeto


@pytest.fixture
def board(projeto):
    # Colunas padrão criadas pelo sinal post_save
    return Board.objects.create(titulo='Sprint 1', projeto=projeto)


@pytest.fixture
def tarefa(board, gerente, dev):
    return Tarefa.objects.create(
        titulo='Landing page',
        board=board,
        responsavel=dev,
        criado_por=gerente,
    )
