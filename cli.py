# cli.py

"""
Запуск SiteMapper из корня репозитория без установки пакета.

Пример запуска:
    python cli.py --config configs/default.yaml run --list
"""
from site_mapper.cli import cli

if __name__ == "__main__":
    cli()
