import click

from app import create_app
from core.pocketbase import ClientResponseError, new_client


@click.command("health", help="Check that the PocketBase server configured in POCKETBASE_URL answers.")
def health():
    app = create_app()
    with app.app_context():
        client = new_client()
        try:
            payload = client.health()
        except ClientResponseError as exc:
            click.echo(click.style(f"PocketBase at {client.base_url} is unreachable: {exc.message}", fg="red"))
            raise SystemExit(1)

        click.echo(click.style(f"PocketBase at {client.base_url}: {payload.get('message', 'OK')}", fg="green"))
