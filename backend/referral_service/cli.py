# referral_service/cli.py
import click
from referral_service.services.referrals.referral_service import (
    grant_referral,
    get_tokens_for_sponsor,
)
from referral_service.repositories.waiting_list_repository import count_entries

def register_cli(app):
    @app.cli.command("grant-token")
    @click.option("--sponsor-id", type=int, required=True,
                  help="users.id del sponsor que recibe el token.")
    @click.option("--expiry", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
                  help="Fecha de expiración (solo informativa, no se guarda).")
    def grant_token_cmd(sponsor_id, expiry):
        """Emite un token de referido para un sponsor (soporte / QA)."""
        with app.app_context():
            data = grant_referral(sponsor_id, expiry=expiry.date() if expiry else None)
            click.echo(f"TOKEN {data['token']} status={data['status']}")

    @app.cli.command("list-tokens")
    @click.option("--sponsor-id", type=int, required=True)
    @click.option("--status", type=click.Choice(["all", "available", "used"]), default="all")
    def list_tokens_cmd(sponsor_id, status):
        """Lista los tokens de un sponsor."""
        with app.app_context():
            tokens = get_tokens_for_sponsor(sponsor_id, status=status)["tokens"]
            for t in tokens:
                click.echo(f"{t['token']}  {t['created']}  {t['status']}  {t['username'] or '-'}")
            click.echo(f"TOTAL {len(tokens)}")

    @app.cli.command("waiting-list-count")
    @click.option("--email", default=None, help="Filtra por email.")
    def waiting_list_count_cmd(email):
        with app.app_context():
            click.echo(f"WAITING LIST {count_entries(email=email)}")
