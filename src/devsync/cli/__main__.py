from devsync.cli.main import app

app()
