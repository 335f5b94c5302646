"""CLI tools for camp HQ administration."""

import click

from camp_api.db.models import User
from camp_api.db.session import SessionLocal


@click.group()
def cli():
    """Camp HQ CLI tools."""
    pass


@cli.command()
@click.option("--email", required=True, help="Staff email address")
@click.option("--name", default=None, help="Display name (new users only)")
def grant_admin(email: str, name: str | None):
    """
    Create a staff user or promote an existing one to admin.

    This is the bootstrap command for a fresh deployment.

    Example:
        camp-api grant-admin --email "organizer@example.com" --name "Organizer"
    """
    db = SessionLocal()
    try:
        email = email.strip().lower()
        user = db.query(User).filter(User.email == email).first()
        if user:
            if user.is_admin and user.is_active:
                click.echo(f"✓ {email} is already an admin")
                return
            user.is_admin = True
            user.is_active = True
            db.commit()
            click.echo(f"✓ Promoted {email} to admin")
            return

        user = User(email=email, display_name=name or email.split("@")[0], is_admin=True)
        db.add(user)
        db.commit()
        click.echo(f"✓ Created admin user: {email}")
        click.echo(f"  ID: {user.id}")

    except Exception as e:
        db.rollback()
        click.echo(f"❌ Error: {e}")
    finally:
        db.close()


@cli.command()
@click.option("--email", required=True, help="User email to revoke sessions for")
def revoke_sessions(email: str):
    """
    Revoke all sessions for a user by bumping their token_version.

    Example:
        camp-api revoke-sessions --email "user@example.com"
    """
    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email == email.strip().lower()).first()
        if not user:
            click.echo(f"❌ User not found: {email}")
            return

        old_version = user.token_version
        user.token_version += 1
        db.commit()

        click.echo(f"✓ Revoked all sessions for {email}")
        click.echo(f"  Token version: {old_version} → {user.token_version}")

    except Exception as e:
        db.rollback()
        click.echo(f"❌ Error: {e}")
    finally:
        db.close()


@cli.command()
@click.option("--email", required=True, help="Staff email to mint a session for")
def issue_token(email: str):
    """
    Print a session token for a staff user (local testing and scripts).

    Example:
        camp-api issue-token --email "organizer@example.com"
    """
    from camp_api.core.security import create_session_token

    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email == email.strip().lower()).first()
        if not user or not user.is_active:
            click.echo(f"❌ Active user not found: {email}")
            return

        click.echo(
            create_session_token(
                user_id=user.id,
                is_admin=user.is_admin,
                token_version=user.token_version,
            )
        )
    finally:
        db.close()


@cli.command()
def backfill_campaign_refs():
    """
    Fill referred_by_id on recruits whose notes carry a "[ref: ...]" marker.

    Safe to run repeatedly; recruits that already have a reference are skipped.

    Example:
        camp-api backfill-campaign-refs
    """
    from camp_api.services import funnel_service

    db = SessionLocal()
    try:
        updated = funnel_service.backfill_referral_refs(db)
        click.echo(f"✓ Backfilled campaign reference on {updated} recruit(s)")
    except Exception as e:
        db.rollback()
        click.echo(f"❌ Error: {e}")
    finally:
        db.close()


if __name__ == "__main__":
    cli()
