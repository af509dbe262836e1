#!/usr/bin/env python
"""Utilitário de linha de comando do Django para o Painel de Suporte."""

import os
import sys


def main():
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'painel_suporte.config.settings')
    from django.core.management import execute_from_command_line

    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
