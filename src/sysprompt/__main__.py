from sysprompt.cli.main import cli

cli()
