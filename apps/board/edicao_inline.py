# apps/board/edicao_inline.py

"""
Edição inline de campos

Cada atributo exibido tem o seu próprio EditorCampo, uma pequena máquina de
estados:

    viewing --ativar--> editing --gatilho--> saving --sucesso--> viewing
                                                   --falha----> editing (com erro)

A PoliticaCommit decide, conforme o tipo do campo, quais eventos viram uma
gravação. Existe no máximo uma gravação em andamento por campo: gatilhos e
cancelamentos recebidos durante 'saving' são ignorados, não enfileirados.
Não há retentativa nem timeout; um gateway travado deixa o campo em
'saving' até responder.

Este módulo não conhece o Django: o gateway é qualquer objeto com
`async commit(identidade, valor) -> ResultadoCommit`.
"""

import inspect
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, NamedTuple, Optional

logger = logging.getLogger(__name__)

# === TIPOS DE CAMPO ===

TEXTO = 'text'
TEXTO_LONGO = 'textarea'
SELECAO = 'select'
DATA = 'date'
USUARIO = 'user'

TIPOS_CAMPO = (TEXTO, TEXTO_LONGO, SELECAO, DATA, USUARIO)
TIPOS_TEXTO = (TEXTO, TEXTO_LONGO)
TIPOS_ESCOLHA = (SELECAO, DATA, USUARIO)

# === MODOS DA SESSÃO ===

VISUALIZANDO = 'viewing'
EDITANDO = 'editing'
SALVANDO = 'saving'

TECLA_CONFIRMAR = 'Enter'
TECLA_CANCELAR = 'Escape'

MENSAGEM_ERRO_PADRAO = 'Erro ao salvar as alterações'


class IdentidadeCampo(NamedTuple):
    """Tarefa + nome do atributo"""

    tarefa_id: int
    campo: str

    def __str__(self):
        return f'tarefa {self.tarefa_id}.{self.campo}'


class ResultadoCommit:
    """
    Resposta de um gateway: sucesso, ou falha com mensagem

    Em caso de sucesso, `valor` é o valor efetivamente gravado (já
    normalizado pelo gateway), ou None quando o gateway não o informa.
    """

    __slots__ = ('sucesso', 'mensagem', 'valor')

    def __init__(self, sucesso: bool, mensagem: Optional[str] = None, valor: Any = None):
        self.sucesso = sucesso
        self.mensagem = mensagem
        self.valor = valor

    @classmethod
    def ok(cls, valor: Any = None):
        return cls(True, valor=valor)

    @classmethod
    def falha(cls, mensagem: Optional[str] = None):
        return cls(False, mensagem)

    def __eq__(self, other):
        if not isinstance(other, ResultadoCommit):
            return NotImplemented
        return (self.sucesso, self.mensagem, self.valor) == (other.sucesso, other.mensagem, other.valor)

    def __repr__(self):
        if self.sucesso:
            return f'ResultadoCommit(ok: {self.valor!r})'
        return f'ResultadoCommit(falha: {self.mensagem!r})'


class GatewayMutacao(ABC):
    """Destino remoto das gravações"""

    @abstractmethod
    async def commit(self, identidade: IdentidadeCampo, valor: Any) -> ResultadoCommit:
        """Persiste `valor`; pode levantar exceção ou devolver uma falha"""


class CampoEditavel:
    """
    Um atributo exibido de uma tarefa

    `valor_atual` é o último valor confirmado pelo gateway;
    `valor_rascunho` é o que o usuário está editando.
    """

    def __init__(
        self,
        identidade: IdentidadeCampo,
        tipo: str,
        valor_atual: Any,
        validador: Optional[Callable[[Any], Optional[str]]] = None,
        opcoes: Optional[List[Dict]] = None,
    ):
        if tipo not in TIPOS_CAMPO:
            raise ValueError(f'Tipo de campo inválido: {tipo}')

        self.identidade = identidade
        self.tipo = tipo
        self.valor_atual = valor_atual
        self.valor_rascunho = valor_atual
        self.validador = validador
        self.opcoes = opcoes or []

    @property
    def alterado(self) -> bool:
        return self.valor_rascunho != self.valor_atual

    def validar(self) -> Optional[str]:
        """Mensagem de erro do validador, ou None"""
        if self.validador is None:
            return None
        return self.validador(self.valor_rascunho) or None

    def descartar_rascunho(self):
        self.valor_rascunho = self.valor_atual


class SessaoEdicao:
    """Existe do início da edição até o sucesso da gravação ou o cancelamento"""

    def __init__(self):
        self.modo = EDITANDO
        self.erro: Optional[str] = None

    def __repr__(self):
        return f'SessaoEdicao({self.modo}, erro={self.erro!r})'


class PoliticaCommit:
    """
    Quando um rascunho vira gravação

    - texto e texto longo: Enter sem Shift, ou perda de foco com alteração
    - seleção, data e usuário: a própria escolha grava, sem confirmação
    """

    def grava_na_tecla(self, campo: CampoEditavel, tecla: str, shift: bool = False) -> bool:
        return campo.tipo in TIPOS_TEXTO and tecla == TECLA_CONFIRMAR and not shift

    def cancela_na_tecla(self, campo: CampoEditavel, tecla: str) -> bool:
        return tecla == TECLA_CANCELAR

    def reage_a_perda_de_foco(self, campo: CampoEditavel) -> bool:
        return campo.tipo in TIPOS_TEXTO

    def grava_na_selecao(self, campo: CampoEditavel) -> bool:
        return campo.tipo in TIPOS_ESCOLHA


class EditorCampo:
    """
    Máquina de estados de edição de um campo

    `on_change(valor)` é chamado logo após cada gravação bem-sucedida; pode
    ser uma função comum ou uma corrotina.
    """

    def __init__(
        self,
        campo: CampoEditavel,
        gateway: GatewayMutacao,
        on_change: Optional[Callable[[Any], Any]] = None,
        politica: Optional[PoliticaCommit] = None,
    ):
        self.campo = campo
        self.gateway = gateway
        self.on_change = on_change
        self.politica = politica or PoliticaCommit()
        self.sessao: Optional[SessaoEdicao] = None
        self.desmontado = False
        self._geracao = 0

    # === ESTADO ===

    @property
    def modo(self) -> str:
        return self.sessao.modo if self.sessao else VISUALIZANDO

    @property
    def erro(self) -> Optional[str]:
        return self.sessao.erro if self.sessao else None

    def estado(self) -> Dict:
        return {
            'tarefa_id': self.campo.identidade.tarefa_id,
            'campo': self.campo.identidade.campo,
            'tipo': self.campo.tipo,
            'modo': self.modo,
            'valor_atual': self.campo.valor_atual,
            'valor_rascunho': self.campo.valor_rascunho,
            'erro': self.erro,
        }

    def _ignorar(self, evento: str) -> bool:
        logger.debug(f"{self.campo.identidade}: {evento} ignorado em {self.modo}")
        return False

    # === EVENTOS ===

    def ativar(self) -> bool:
        """Entra em edição com o rascunho igual ao valor atual"""
        if self.desmontado or self.sessao is not None:
            return self._ignorar('ativar')

        self.campo.descartar_rascunho()
        self.sessao = SessaoEdicao()
        return True

    def modificar(self, valor: Any) -> bool:
        """Altera o rascunho sem gravar"""
        if self.modo != EDITANDO:
            return self._ignorar('modificar')

        self.campo.valor_rascunho = valor
        return True

    async def tecla(self, tecla: str, shift: bool = False) -> bool:
        if self.modo != EDITANDO:
            return self._ignorar(f'tecla {tecla}')

        if self.politica.cancela_na_tecla(self.campo, tecla):
            return self.cancelar()

        if not self.politica.grava_na_tecla(self.campo, tecla, shift):
            return False

        if not self.campo.alterado:
            self._encerrar()
            return False

        return await self._gravar()

    async def perder_foco(self) -> bool:
        if self.modo != EDITANDO or not self.politica.reage_a_perda_de_foco(self.campo):
            return self._ignorar('perder_foco')

        if not self.campo.alterado:
            self._encerrar()
            return False

        return await self._gravar()

    async def selecionar(self, valor: Any) -> bool:
        if self.modo != EDITANDO or not self.politica.grava_na_selecao(self.campo):
            return self._ignorar('selecionar')

        self.campo.valor_rascunho = valor
        if not self.campo.alterado:
            self._encerrar()
            return False

        return await self._gravar()

    def cancelar(self) -> bool:
        """Volta a exibir o valor atual; sem efeito durante a gravação"""
        if self.modo != EDITANDO:
            return self._ignorar('cancelar')

        self._encerrar()
        return True

    def desmontar(self):
        """
        O registro saiu da tela

        Uma gravação em andamento não é cancelada, mas a resposta dela deixa
        de alterar este editor.
        """
        self.desmontado = True
        self._geracao += 1
        self.sessao = None
        self.campo.descartar_rascunho()

    # === GRAVAÇÃO ===

    def _encerrar(self):
        self.campo.descartar_rascunho()
        self.sessao = None

    async def _gravar(self) -> bool:
        sessao = self.sessao

        erro = self.campo.validar()
        if erro:
            sessao.erro = erro
            return False

        valor = self.campo.valor_rascunho
        sessao.modo = SALVANDO
        sessao.erro = None
        geracao = self._geracao

        resultado = await self._chamar_gateway(valor)

        if geracao != self._geracao:
            logger.info(f"{self.campo.identidade}: resposta descartada após desmontar")
            return False

        if not resultado.sucesso:
            sessao.modo = EDITANDO
            sessao.erro = resultado.mensagem or MENSAGEM_ERRO_PADRAO
            return False

        if resultado.valor is not None:
            valor = resultado.valor

        self.campo.valor_atual = valor
        self.campo.valor_rascunho = valor
        self.sessao = None

        await self._notificar(valor)
        return True

    async def _chamar_gateway(self, valor: Any) -> ResultadoCommit:
        try:
            resultado = await self.gateway.commit(self.campo.identidade, valor)
        except Exception as exc:
            logger.warning(f"❌ Falha ao gravar {self.campo.identidade}: {exc}")
            return ResultadoCommit.falha(str(exc) or None)

        if resultado is None:
            return ResultadoCommit.ok()
        if not resultado.sucesso:
            logger.info(f"⚠️ Gravação recusada em {self.campo.identidade}: {resultado.mensagem}")
        return resultado

    async def _notificar(self, valor: Any):
        if self.on_change is None:
            return
        retorno = self.on_change(valor)
        if inspect.isawaitable(retorno):
            await retorno
