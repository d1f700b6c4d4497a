from natgateway.cli.main import run

run()
