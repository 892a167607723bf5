from site_migrate.cli import cli

cli()
