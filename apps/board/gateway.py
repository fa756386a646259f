# apps/board/gateway.py

"""
Gravação remota dos campos editáveis de uma tarefa

GatewayTarefa é o gateway usado pelos editores inline: valida o valor,
verifica a permissão do usuário e grava um único atributo pelo ORM.
`salvar()` é o caminho síncrono (views HTTP); `commit()` é o mesmo caminho
embrulhado para o event loop dos consumers.
"""

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from channels.db import database_sync_to_async
from django.conf import settings
from django.db import DatabaseError
from django.utils import timezone
from django.utils.dateparse import parse_date

from apps.core.models import Tarefa
from apps.core.permissions import TrilhaPermissions
from apps.core.utils import gerar_cor_usuario
from .edicao_inline import (
    TEXTO, TEXTO_LONGO, SELECAO, DATA, USUARIO,
    MENSAGEM_ERRO_PADRAO,
    CampoEditavel, GatewayMutacao, IdentidadeCampo, ResultadoCommit,
)

logger = logging.getLogger(__name__)

# Valor enviado pelo cliente para "sem responsável"
SEM_RESPONSAVEL = 'unassigned'

CAMPOS_EDITAVEIS = {
    'titulo': TEXTO,
    'descricao': TEXTO_LONGO,
    'notas': TEXTO_LONGO,
    'status': SELECAO,
    'prioridade': SELECAO,
    'prazo': DATA,
    'responsavel': USUARIO,
    'orcamento': TEXTO,
}

PRIORIDADES = [valor for valor, _ in Tarefa.PRIORIDADE_CHOICES]


# === VALIDADORES ===

def _texto(valor) -> str:
    return '' if valor is None else str(valor)


def validar_titulo(valor) -> Optional[str]:
    texto = _texto(valor).strip()
    if not texto:
        return 'O título é obrigatório'
    if len(texto) > settings.TRILHA_TITULO_MAX:
        return f'O título deve ter no máximo {settings.TRILHA_TITULO_MAX} caracteres'
    return None


def validar_descricao(valor) -> Optional[str]:
    if len(_texto(valor)) > settings.TRILHA_DESCRICAO_MAX:
        return f'A descrição deve ter no máximo {settings.TRILHA_DESCRICAO_MAX} caracteres'
    return None


def validar_notas(valor) -> Optional[str]:
    if len(_texto(valor)) > settings.TRILHA_NOTAS_MAX:
        return f'As notas devem ter no máximo {settings.TRILHA_NOTAS_MAX} caracteres'
    return None


def validar_prioridade(valor) -> Optional[str]:
    if valor not in PRIORIDADES:
        return 'Prioridade inválida'
    return None


def converter_prazo(valor) -> Optional[date]:
    """'' ou None limpam o prazo; texto ISO (AAAA-MM-DD) vira date"""
    if valor in (None, ''):
        return None
    if isinstance(valor, date):
        return valor
    try:
        prazo = parse_date(str(valor))
    except ValueError:
        prazo = None
    if prazo is None:
        raise ValueError('Data inválida')
    return prazo


def validar_prazo(valor) -> Optional[str]:
    try:
        prazo = converter_prazo(valor)
    except ValueError as e:
        return str(e)
    if prazo is not None and prazo < timezone.localdate():
        return 'O prazo não pode estar no passado'
    return None


def converter_orcamento(valor) -> Optional[Decimal]:
    if valor in (None, ''):
        return None
    try:
        orcamento = Decimal(str(valor).strip().replace(',', '.'))
    except InvalidOperation:
        raise ValueError('Orçamento inválido')
    if not orcamento.is_finite():
        raise ValueError('Orçamento inválido')
    return orcamento.quantize(Decimal('0.01'))


def validar_orcamento(valor) -> Optional[str]:
    try:
        orcamento = converter_orcamento(valor)
    except ValueError as e:
        return str(e)
    if orcamento is not None:
        if orcamento < 0:
            return 'O orçamento não pode ser negativo'
        if orcamento >= Decimal('100000000'):
            return 'Orçamento acima do limite'
    return None


def converter_responsavel(valor) -> Optional[int]:
    if valor in (None, '', SEM_RESPONSAVEL):
        return None
    try:
        return int(valor)
    except (TypeError, ValueError):
        raise ValueError('Responsável inválido')


VALIDADORES_SIMPLES = {
    'titulo': validar_titulo,
    'descricao': validar_descricao,
    'notas': validar_notas,
    'prioridade': validar_prioridade,
    'prazo': validar_prazo,
    'orcamento': validar_orcamento,
}


def criar_validador(tarefa: Tarefa, campo: str):
    """
    Validador do campo no contexto da tarefa

    Status e responsável dependem do board (colunas) e do projeto (membros).
    """
    if campo in VALIDADORES_SIMPLES:
        return VALIDADORES_SIMPLES[campo]

    if campo == 'status':
        status_validos = set(tarefa.board.colunas.values_list('status_valor', flat=True))

        def validar_status(valor):
            if valor not in status_validos:
                return 'Status inválido para este board'
            return None

        return validar_status

    if campo == 'responsavel':
        membros = set(tarefa.board.projeto.membros.values_list('id', flat=True))

        def validar_responsavel(valor):
            try:
                responsavel_id = converter_responsavel(valor)
            except ValueError as e:
                return str(e)
            if responsavel_id is not None and responsavel_id not in membros:
                return 'O responsável deve ser membro do projeto'
            return None

        return validar_responsavel

    raise KeyError(campo)


# === SERIALIZAÇÃO ===

def valor_para_cliente(tarefa: Tarefa, campo: str) -> Any:
    """Valor do atributo no formato trocado com o cliente (sempre texto)"""
    if campo == 'responsavel':
        return str(tarefa.responsavel_id) if tarefa.responsavel_id else SEM_RESPONSAVEL
    if campo == 'prazo':
        return tarefa.prazo.isoformat() if tarefa.prazo else ''
    if campo == 'orcamento':
        return '' if tarefa.orcamento is None else str(tarefa.orcamento)
    return getattr(tarefa, campo)


def opcoes_do_campo(tarefa: Tarefa, campo: str) -> List[Dict]:
    if campo == 'status':
        return [
            {'valor': coluna.status_valor, 'rotulo': coluna.titulo, 'cor': coluna.cor}
            for coluna in tarefa.board.colunas.all()
        ]
    if campo == 'prioridade':
        return [{'valor': valor, 'rotulo': rotulo} for valor, rotulo in Tarefa.PRIORIDADE_CHOICES]
    if campo == 'responsavel':
        opcoes = [{'valor': SEM_RESPONSAVEL, 'rotulo': 'Sem responsável'}]
        for membro in tarefa.board.projeto.membros.order_by('first_name', 'username'):
            opcoes.append({
                'valor': str(membro.id),
                'rotulo': membro.get_nome_exibicao(),
                'cor': gerar_cor_usuario(membro.username),
            })
        return opcoes
    return []


def montar_campo(tarefa: Tarefa, campo: str) -> CampoEditavel:
    """Cria o CampoEditavel de um atributo da tarefa (acessa o banco)"""
    if campo not in CAMPOS_EDITAVEIS:
        raise KeyError(campo)

    return CampoEditavel(
        identidade=IdentidadeCampo(tarefa.id, campo),
        tipo=CAMPOS_EDITAVEIS[campo],
        valor_atual=valor_para_cliente(tarefa, campo),
        validador=criar_validador(tarefa, campo),
        opcoes=opcoes_do_campo(tarefa, campo),
    )


# === GATEWAY ===

class GatewayTarefa(GatewayMutacao):
    """Grava atributos de tarefas em nome de um usuário"""

    def __init__(self, usuario):
        self.usuario = usuario

    def salvar(self, identidade: IdentidadeCampo, valor: Any) -> ResultadoCommit:
        campo = identidade.campo
        if campo not in CAMPOS_EDITAVEIS:
            return ResultadoCommit.falha(f'Campo não editável: {campo}')

        try:
            tarefa = Tarefa.objects.select_related('board__projeto').get(id=identidade.tarefa_id)
        except Tarefa.DoesNotExist:
            return ResultadoCommit.falha('Tarefa não encontrada')

        if not TrilhaPermissions.pode_editar_tarefa(self.usuario, tarefa):
            logger.warning(f"🚫 {self.usuario} sem permissão para editar {identidade}")
            return ResultadoCommit.falha('Você não tem permissão para editar esta tarefa')

        erro = criar_validador(tarefa, campo)(valor)
        if erro:
            return ResultadoCommit.falha(erro)

        if campo == 'status' and valor != tarefa.status:
            coluna = tarefa.board.colunas.filter(status_valor=valor).first()
            if coluna is not None and not coluna.pode_adicionar_tarefa():
                return ResultadoCommit.falha(
                    f'Limite WIP da coluna {coluna.titulo} atingido ({coluna.limite_wip})'
                )

        if campo == 'responsavel':
            tarefa.responsavel_id = converter_responsavel(valor)
        elif campo == 'prazo':
            tarefa.prazo = converter_prazo(valor)
        elif campo == 'orcamento':
            tarefa.orcamento = converter_orcamento(valor)
        elif campo == 'titulo':
            tarefa.titulo = _texto(valor).strip()
        else:
            setattr(tarefa, campo, _texto(valor))

        try:
            tarefa.save(update_fields=[campo, 'atualizado_em'])
        except DatabaseError:
            logger.exception(f"❌ Erro de banco ao gravar {identidade}")
            return ResultadoCommit.falha(MENSAGEM_ERRO_PADRAO)

        logger.info(f"✏️ {self.usuario} alterou {identidade}")
        return ResultadoCommit.ok(valor_para_cliente(tarefa, campo))

    async def commit(self, identidade: IdentidadeCampo, valor: Any) -> ResultadoCommit:
        return await database_sync_to_async(self.salvar)(identidade, valor)
