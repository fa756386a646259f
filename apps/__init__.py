# apps/__init__.py

"""
Trilha Board - Aplicações Django

Este pacote contém todas as aplicações do sistema:
- core: Models principais, permissões, notificações, tema e cronômetro
- board: Kanban, edição inline de campos e WebSockets
"""

__version__ = '0.1.0'
