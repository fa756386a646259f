# apps/core/cronometro.py

import logging
from typing import Optional

from django.db import transaction
from django.utils import timezone

from .models import RegistroHora
from .utils import formatar_duracao

logger = logging.getLogger(__name__)


class ServicoCronometro:
    """
    Cronômetro de horas de um usuário

    Cada usuário tem no máximo um registro em andamento: iniciar um novo
    cronômetro para o anterior antes de criar o registro.
    """

    def __init__(self, usuario):
        self.usuario = usuario

    def registro_ativo(self) -> Optional[RegistroHora]:
        return (
            RegistroHora.objects
            .select_related('tarefa')
            .filter(usuario=self.usuario, em_andamento=True)
            .first()
        )

    @transaction.atomic
    def iniciar(self, descricao: str, tarefa=None) -> RegistroHora:
        descricao = (descricao or '').strip()
        if not descricao:
            raise ValueError('Descrição é obrigatória')

        self.parar()

        registro = RegistroHora.objects.create(
            usuario=self.usuario,
            tarefa=tarefa,
            projeto=tarefa.board.projeto if tarefa else None,
            descricao=descricao,
            inicio=timezone.now(),
            em_andamento=True,
        )
        logger.info(f"⏱️ Cronômetro iniciado por {self.usuario.username}: {descricao}")
        return registro

    def parar(self) -> Optional[RegistroHora]:
        """Para o cronômetro ativo; retorna None se não havia nenhum"""
        registro = self.registro_ativo()
        if registro is None:
            return None

        registro.fim = timezone.now()
        # duracao_segundos e em_andamento são ajustados no pre_save
        registro.save()
        logger.info(
            f"⏹️ Cronômetro parado por {self.usuario.username}: "
            f"{formatar_duracao(registro.duracao_segundos)}"
        )
        return registro

    def tempo_decorrido(self, agora=None) -> int:
        """Segundos inteiros desde o início do registro ativo (0 se parado)"""
        registro = self.registro_ativo()
        if registro is None:
            return 0
        agora = agora or timezone.now()
        return max(int((agora - registro.inicio).total_seconds()), 0)

    def estado(self) -> dict:
        registro = self.registro_ativo()
        if registro is None:
            return {'ativo': False}

        decorrido = self.tempo_decorrido()
        return {
            'ativo': True,
            'registro_id': registro.id,
            'descricao': registro.descricao,
            'tarefa_id': registro.tarefa_id,
            'inicio': registro.inicio.isoformat(),
            'decorrido': decorrido,
            'decorrido_formatado': formatar_duracao(decorrido),
        }
