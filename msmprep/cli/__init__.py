import click

from .commands.augment import augment_command
from .commands.polish import polish_command


@click.group()
def app() -> None:
    pass


app.add_command(augment_command, name="augment")
app.add_command(polish_command, name="polish")
__all__ = ["app"]
