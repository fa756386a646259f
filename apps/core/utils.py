# apps/core/utils.py

import hashlib
from datetime import timedelta
from django.utils import timezone
from django.db.models import Sum
from typing import Dict, Optional


def gerar_cor_usuario(username: str) -> str:
    """
    Gera uma cor consistente baseada no username
    Usada nos avatares e nas opções do campo de responsável
    """
    hash_hex = hashlib.md5(username.encode()).hexdigest()
    return f"#{hash_hex[:6]}"


def formatar_duracao(segundos: Optional[int]) -> str:
    """
    Formata uma duração em segundos
    Ex: 3723 -> "1h 2m 3s", 123 -> "2m 3s", 5 -> "5s"
    """
    segundos = int(segundos or 0)
    horas, resto = divmod(segundos, 3600)
    minutos, segs = divmod(resto, 60)

    if horas > 0:
        return f"{horas}h {minutos}m {segs}s"
    if minutos > 0:
        return f"{minutos}m {segs}s"
    return f"{segs}s"


def inicio_da_semana(agora=None):
    """Segunda-feira 00:00 (horário local) da semana corrente"""
    agora = timezone.localtime(agora or timezone.now())
    segunda = agora - timedelta(days=agora.weekday())
    return segunda.replace(hour=0, minute=0, second=0, microsecond=0)


def calcular_estatisticas_usuario(usuario) -> Dict:
    """
    Estatísticas do painel pessoal

    Tarefas abertas e concluídas sob responsabilidade do usuário, tarefas
    atrasadas, segundos registrados na semana e cronômetro ativo.
    """
    from .models import Tarefa, RegistroHora, STATUS_CONCLUIDO

    tarefas = Tarefa.objects.filter(responsavel=usuario, arquivado=False)
    abertas = tarefas.exclude(status=STATUS_CONCLUIDO)
    hoje = timezone.localdate()

    segundos_semana = RegistroHora.objects.filter(
        usuario=usuario,
        em_andamento=False,
        inicio__gte=inicio_da_semana(),
    ).aggregate(total=Sum('duracao_segundos'))['total'] or 0

    ativo = RegistroHora.objects.filter(usuario=usuario, em_andamento=True).first()

    return {
        'tarefas_abertas': abertas.count(),
        'tarefas_concluidas': tarefas.filter(status=STATUS_CONCLUIDO).count(),
        'tarefas_atrasadas': abertas.filter(prazo__lt=hoje).count(),
        'segundos_semana': segundos_semana,
        'horas_semana': formatar_duracao(segundos_semana),
        'cronometro_ativo': ativo is not None,
        'projetos': usuario.get_projetos_acessiveis().count(),
    }
