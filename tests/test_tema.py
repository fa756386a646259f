# tests/test_tema.py

import pytest
from django.contrib.auth.models import AnonymousUser

from apps.core.tema import ConfiguracaoTema


def test_valores_invalidos():
    with pytest.raises(ValueError):
        ConfiguracaoTema('sepia', 'default')
    with pytest.raises(ValueError):
        ConfiguracaoTema('dark', 'pink')


def test_visitante_usa_padrao():
    tema = ConfiguracaoTema.carregar(AnonymousUser())
    assert (tema.modo, tema.cor) == ('system', 'default')


def test_aplicar():
    aplicado = ConfiguracaoTema('dark', 'blue').aplicar()

    assert aplicado['classes'] == 'dark theme-blue'
    assert aplicado['variaveis']['--primary'] == '221.2 83.2% 53.3%'
    assert '--primary: 221.2 83.2% 53.3%' in aplicado['estilo']
    assert not aplicado['seguir_sistema']


def test_modo_sistema_sem_classe():
    aplicado = ConfiguracaoTema('system', 'default').aplicar()
    assert aplicado['classes'] == ''
    assert aplicado['seguir_sistema']


@pytest.mark.django_db
def test_persistir_e_carregar(dev):
    ConfiguracaoTema('light', 'green').persistir(dev)

    dev.refresh_from_db()
    tema = ConfiguracaoTema.carregar(dev)
    assert (tema.modo, tema.cor) == ('light', 'green')
