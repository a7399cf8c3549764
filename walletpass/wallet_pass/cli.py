# walletpass/wallet_pass/cli.py

"""
Wallet Pass CLI Commands

Flask CLI commands for provisioning the Google Wallet issuer, including:
- Configuration checks
- Generic class creation
- Generic class inspection
"""

import json

import click
from flask import current_app
from flask.cli import with_appcontext

ISSUER_CONSOLE_URL = 'https://pay.google.com/gp/m/issuer/{issuer_id}'


def _issuer_or_exit():
    from walletpass.wallet_pass.errors import ConfigurationError
    from walletpass.wallet_pass.issuance import get_wallet_issuer

    issuer = get_wallet_issuer()
    try:
        issuer.require_settings()
    except ConfigurationError as e:
        click.echo(f'Google Wallet is not configured: {e.message}', err=True)
        raise SystemExit(1)
    return issuer


@click.group()
def wallet():
    """Google Wallet issuer commands."""
    pass


@wallet.command('check-config')
@with_appcontext
def check_config():
    """Load the issuer settings and key file and report problems."""
    from walletpass.wallet_pass.config import load_issuer_settings
    from walletpass.wallet_pass.errors import ConfigurationError

    try:
        settings = load_issuer_settings(current_app.config)
    except ConfigurationError as e:
        click.echo(f'Configuration invalid: {e.message}', err=True)
        raise SystemExit(1)

    click.echo(f'Issuer ID:        {settings.issuer_id}')
    click.echo(f'Class ID:         {settings.class_id}')
    click.echo(f'Service account:  {settings.service_account_email}')
    click.echo(f'Key file:         {settings.credentials_path}')
    click.echo(f'Origins:          {", ".join(settings.origins)}')
    click.echo('Configuration OK')


@wallet.command('create-class')
@click.option('--review-status', type=click.Choice(['DRAFT', 'UNDER_REVIEW']), default='DRAFT',
              show_default=True, help='UNDER_REVIEW submits the class for approval.')
@click.option('--dry-run', is_flag=True, help='Print the class payload without creating it.')
@with_appcontext
def create_class(review_status, dry_run):
    """Create the generic pass class every attendee pass uses."""
    from walletpass.wallet_pass.client import WalletApiError
    from walletpass.wallet_pass.payloads import build_pass_class

    issuer = _issuer_or_exit()
    settings = issuer.settings
    payload = build_pass_class(settings, review_status=review_status)

    click.echo('Class payload:')
    click.echo(json.dumps(payload, indent=2))
    if dry_run:
        return

    try:
        created = issuer.client.insert_generic_class(payload)
    except WalletApiError as e:
        if e.is_conflict:
            click.echo(f'Warning: class {settings.class_id} already exists.')
            click.echo(f'Manage your classes at {ISSUER_CONSOLE_URL.format(issuer_id=settings.issuer_id)}')
            return
        click.echo(f'Error creating class: {e.message}', err=True)
        raise SystemExit(1)

    click.echo(f"Class {created.get('id', settings.class_id)} created.")
    if review_status == 'DRAFT':
        click.echo('DRAFT classes are only usable by test accounts of the issuer.')
    else:
        click.echo('The class must be approved by Google before passes are publicly usable.')


@wallet.command('show-class')
@with_appcontext
def show_class():
    """Fetch and print the configured generic class."""
    from walletpass.wallet_pass.client import WalletApiError

    issuer = _issuer_or_exit()
    try:
        existing = issuer.client.get_generic_class(issuer.settings.class_id)
    except WalletApiError as e:
        click.echo(f'Error fetching class {issuer.settings.class_id}: {e.message}', err=True)
        raise SystemExit(1)
    click.echo(json.dumps(existing, indent=2))
