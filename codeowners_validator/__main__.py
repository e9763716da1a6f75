from codeowners_validator.cli import app

app()
