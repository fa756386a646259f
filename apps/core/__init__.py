# apps/core/__init__.py

"""
Core - Aplicação principal do Trilha Board

Contém:
- Models (Usuario, Projeto, Board, Coluna, Tarefa, RegistroHora, Notificacao)
- Sistema de permissões
- Notificações em tempo real, tema e cronômetro
- Comando de seed para desenvolvimento
"""
