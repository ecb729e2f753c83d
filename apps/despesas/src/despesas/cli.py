"""CLI bootstrap for despesas."""

import typer

from despesas.core.logging import configure_logging
from despesas.domain.errors import DomainError
from despesas.domain.money import (
    format_from_digits,
    format_money,
    parse_to_amount,
    try_parse_amount,
)

app = typer.Typer(help="CLI for personal expense tracking.")
STRICT_OPTION = typer.Option(False, "--strict", help="Fail on unparseable input.")


@app.callback()
def setup() -> None:
    configure_logging()


@app.command("healthcheck")
def healthcheck() -> None:
    """Verify that the CLI entrypoint is available."""
    typer.echo("despesas is ready")


@app.command("format")
def format_amount(raw: str) -> None:
    """Format typed digits as cents, e.g. 2550 -> R$ 25,50."""
    typer.echo(format_from_digits(raw))


@app.command("parse")
def parse_amount(display: str, strict: bool = STRICT_OPTION) -> None:
    """Parse a display string such as "R$ 25,50" into 25.50."""
    if strict and try_parse_amount(display) is None:
        typer.echo(f"Valor invalido: {display!r}", err=True)
        raise typer.Exit(code=1)
    typer.echo(format_money(parse_to_amount(display)))


@app.command("issue-key")
def issue_key(email: str) -> None:
    """Print the active API key of a user, issuing one when missing."""
    _run_key_command(email, rotate=False)


@app.command("rotate-key")
def rotate_key(email: str) -> None:
    """Revoke the current API key of a user and print a new one."""
    _run_key_command(email, rotate=True)


def _run_key_command(email: str, *, rotate: bool) -> None:
    from despesas.db.session import SessionFactory
    from despesas.repositories.api_key_repository import ApiKeyRepository
    from despesas.services.api_key_service import ApiKeyService

    with SessionFactory() as session:
        service = ApiKeyService(
            api_key_repository=ApiKeyRepository(session),
            session=session,
        )
        try:
            record = service.rotate(email) if rotate else service.get_or_issue(email)
        except DomainError as exc:
            typer.echo(exc.message, err=True)
            raise typer.Exit(code=1) from exc
        typer.echo(record.api_key)


def main() -> None:
    """Run the despesas CLI application."""
    app()


if __name__ == "__main__":
    main()
