from contentshape.cli.app import app

app()
