import click

from app import create_app
from app.modules.submission.routes import build_submission_page


@click.command("submissions:list", help="Print the newest game submissions.")
@click.option("-n", "--limit", default=20, show_default=True, type=click.IntRange(1, 500), help="How many to show.")
def submissions_list(limit):
    app = create_app()
    with app.app_context():
        page = build_submission_page()
        page.page_size = limit
        page.mount()

        if page.error:
            click.echo(click.style(page.error, fg="red"))
            raise SystemExit(1)
        if not page.submissions:
            click.echo("No submissions yet.")
            return

        for submission in page.submissions:
            click.echo(
                f"{submission.created[:19]}  {submission.game_title:<30.30}  {submission.full_name:<25.25}  "
                f"{submission.hosted_link}"
            )
        click.echo(click.style(f"{len(page.submissions)} submission(s).", fg="green"))
