# apps/core/signals.py

import logging

from django.db.models.signals import post_save, pre_save, m2m_changed
from django.dispatch import receiver
from .models import Usuario, Projeto, Board, Tarefa, RegistroHora, Notificacao
from .realtime import publicar_notificacao

logger = logging.getLogger(__name__)


@receiver(post_save, sender=Board)
def criar_colunas_padrao(sender, instance, created, **kwargs):
    """Cria as colunas quando um novo board é criado sem colunas"""
    if created and not instance.colunas.exists():
        instance.criar_colunas_padrao()


@receiver(pre_save, sender=RegistroHora)
def calcular_duracao_automatica(sender, instance, **kwargs):
    """Calcula a duração em segundos quando o fim é definido"""
    if instance.fim and instance.inicio:
        delta = instance.fim - instance.inicio
        instance.duracao_segundos = max(int(delta.total_seconds()), 0)
        instance.em_andamento = False


@receiver(m2m_changed, sender=Projeto.membros.through)
def notificar_novos_membros(sender, instance, action, pk_set, **kwargs):
    """Notifica quem foi adicionado a um projeto"""
    if action != "post_add" or not pk_set or not isinstance(instance, Projeto):
        return

    for membro in Usuario.objects.filter(pk__in=pk_set).exclude(pk=instance.criado_por_id):
        Notificacao.objects.create(
            usuario=membro,
            titulo='Novo projeto',
            mensagem=f'Você foi adicionado ao projeto {instance.nome}',
            tipo='project',
            dados={'projeto_id': instance.id},
        )


@receiver(pre_save, sender=Tarefa)
def registrar_responsavel_anterior(sender, instance, **kwargs):
    """
    Guarda o responsável anterior e garante que o novo seja membro do projeto
    """
    instance._responsavel_anterior_id = None
    if instance.pk:
        instance._responsavel_anterior_id = (
            sender.objects.filter(pk=instance.pk).values_list('responsavel_id', flat=True).first()
        )

    if instance.responsavel_id and instance.board_id:
        projeto = instance.board.projeto
        if not projeto.membros.filter(id=instance.responsavel_id).exists():
            projeto.membros.add(instance.responsavel_id)
            logger.info(f"👥 Usuário {instance.responsavel_id} adicionado ao projeto {projeto.nome}")


@receiver(post_save, sender=Tarefa)
def notificar_atribuicao(sender, instance, created, **kwargs):
    """Notifica o novo responsável quando a atribuição muda"""
    anterior = getattr(instance, '_responsavel_anterior_id', None)
    if not instance.responsavel_id or instance.responsavel_id == anterior:
        return
    if instance.responsavel_id == instance.criado_por_id and created:
        return

    Notificacao.objects.create(
        usuario_id=instance.responsavel_id,
        titulo='Tarefa atribuída',
        mensagem=f'Você é o responsável pela tarefa "{instance.titulo}"',
        tipo='assignment',
        dados={'tarefa_id': instance.id, 'board_id': instance.board_id},
    )


@receiver(post_save, sender=Notificacao)
def publicar_nova_notificacao(sender, instance, created, **kwargs):
    """Empurra as inserções para os inscritos em tempo real"""
    if created:
        publicar_notificacao(instance)
