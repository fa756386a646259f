# apps/core/tema.py

"""
Configuração de tema da interface

O tema é um objeto de configuração com três operações explícitas:
carregar (da preferência salva do usuário), aplicar (gera as classes da raiz
e as variáveis CSS) e persistir (grava de volta no usuário).
"""

import logging
from typing import Dict, List

logger = logging.getLogger(__name__)

MODOS = ('light', 'dark', 'system')
MODO_PADRAO = 'system'
COR_PADRAO = 'default'

# Valores HSL de --primary / --primary-foreground por cor
CORES = {
    'default': {'primary': '222.2 84% 4.9%', 'primary_foreground': '210 40% 98%'},
    'blue': {'primary': '221.2 83.2% 53.3%', 'primary_foreground': '210 40% 98%'},
    'green': {'primary': '142.1 76.2% 36.3%', 'primary_foreground': '355.7 100% 97.3%'},
    'purple': {'primary': '262.1 83.3% 57.8%', 'primary_foreground': '210 40% 98%'},
    'orange': {'primary': '24.6 95% 53.1%', 'primary_foreground': '60 9.1% 97.8%'},
    'red': {'primary': '346.8 77.2% 49.8%', 'primary_foreground': '355.7 100% 97.3%'},
}


class ConfiguracaoTema:
    """Modo (claro/escuro/sistema) e cor primária escolhidos pelo usuário"""

    def __init__(self, modo: str = MODO_PADRAO, cor: str = COR_PADRAO):
        self.validar(modo, cor)
        self.modo = modo
        self.cor = cor

    @staticmethod
    def validar(modo: str, cor: str):
        if modo not in MODOS:
            raise ValueError(f'Modo de tema inválido: {modo}')
        if cor not in CORES:
            raise ValueError(f'Cor de tema inválida: {cor}')

    @classmethod
    def carregar(cls, usuario) -> 'ConfiguracaoTema':
        """
        Lê a preferência do usuário

        Visitantes anônimos e valores desconhecidos caem no padrão.
        """
        if usuario is None or not usuario.is_authenticated:
            return cls()

        modo = usuario.modo_tema if usuario.modo_tema in MODOS else MODO_PADRAO
        cor = usuario.cor_tema if usuario.cor_tema in CORES else COR_PADRAO
        return cls(modo, cor)

    def classes_raiz(self) -> List[str]:
        classes = []
        if self.modo != 'system':
            classes.append(self.modo)
        if self.cor != COR_PADRAO:
            classes.append(f'theme-{self.cor}')
        return classes

    def variaveis_css(self) -> Dict[str, str]:
        valores = CORES[self.cor]
        return {
            '--primary': valores['primary'],
            '--primary-foreground': valores['primary_foreground'],
        }

    def aplicar(self) -> Dict:
        """Dados que o template base usa na tag <html>"""
        variaveis = self.variaveis_css()
        return {
            'modo': self.modo,
            'cor': self.cor,
            'classes': ' '.join(self.classes_raiz()),
            'variaveis': variaveis,
            'estilo': '; '.join(f'{nome}: {valor}' for nome, valor in variaveis.items()),
            # 'system' delega ao prefers-color-scheme do navegador
            'seguir_sistema': self.modo == 'system',
        }

    def persistir(self, usuario):
        usuario.modo_tema = self.modo
        usuario.cor_tema = self.cor
        usuario.save(update_fields=['modo_tema', 'cor_tema', 'atualizado_em'])
        logger.info(f"🎨 Tema de {usuario.username} salvo: {self.modo}/{self.cor}")

    def para_dict(self) -> Dict:
        return {'modo': self.modo, 'cor': self.cor}
