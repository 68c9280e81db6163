from typing import Optional

import typer

from worker.app.config import settings
from worker.app.errors import ExecutionError
from worker.app.main import serve
from worker.app.services.alt_text import generate_alt_texts

app = typer.Typer(
    help="ollama-alt-text: generate alt-text for an image with a local ollama vision model",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help", "-help"]},
)


def valid_port(port: str) -> bool:
    try:
        int(port)
    except ValueError:
        return False
    return True


@app.command()
def run(
    ctx: typer.Context,
    image_path: Optional[str] = typer.Argument(None, help="Path to the image file."),
    count: int = typer.Option(
        settings.DEFAULT_COUNT, "--count", "-count", help="Number of alt texts to generate."
    ),
    server: bool = typer.Option(False, "--server", "-server", help="Run as a web server."),
    port: str = typer.Option(
        settings.PORT, "--port", "-port", help="Port to run the server on."
    ),
    model: str = typer.Option(
        settings.DEFAULT_MODEL, "--model", "-model", help="Model to use for generating alt text."
    ),
):
    """Print alt-text candidates for IMAGE_PATH, or serve GET /generate-alt-text."""
    # an explicit "" is still a path; only an absent argument is missing
    if not server and image_path is None:
        typer.echo(ctx.get_help())
        typer.echo("\nError: Image path is required.")
        return

    if server:
        # port stays a string; only checked for being numeric here
        if not valid_port(port):
            typer.echo("Invalid port number.")
            return
        typer.echo(f"Running server on : {port}")
        try:
            serve(port)
        except Exception as e:
            typer.echo(f"Error starting server: {e}")
        return

    try:
        alt_texts = generate_alt_texts(
            image_path, model=model, count=count, log_events=False
        )
    except ExecutionError as e:
        typer.echo(f"Error executing command: {e}")
        return

    if alt_texts:
        typer.echo("Generated Alt Texts:")
        for i, alt_text in enumerate(alt_texts, start=1):
            typer.echo(f"{i}. {alt_text}")
    else:
        typer.echo("No alt texts generated.")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
