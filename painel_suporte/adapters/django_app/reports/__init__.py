"""App Django de Relatórios."""
