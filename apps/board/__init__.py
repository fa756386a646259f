# apps/board/__init__.py

"""
Board - Aplicação Kanban do Trilha Board

Funcionalidades:
- Interface Kanban com colunas mapeadas para status
- Edição inline de campos de tarefa com gravação remota
- WebSockets para atualizações em tempo real
- Cronômetro de horas trabalhadas
"""
