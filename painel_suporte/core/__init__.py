"""
Core Domain Layer - O Hexágono.

Lógica de negócio pura, sem dependências de frameworks:
- shared: exceções, ports e base de eventos
- tickets: registros de chamados
- reports: relatórios por período e sincronização híbrida
- kanban: filtro/ordenação e estado do quadro
"""
