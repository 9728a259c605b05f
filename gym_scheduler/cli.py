# cli.py
"""
Flask CLI commands for the gym class scheduler.
"""

from datetime import timedelta

import click
from flask import current_app
from flask.cli import with_appcontext
from sqlalchemy import text

from gym_scheduler.extensions import db


@click.command("init-db")
@with_appcontext
def init_database():
    """Create all tables (and, on PostgreSQL, the session overlap guards)."""
    db.create_all()
    click.echo(f"Database initialized ({db.engine.dialect.name}).")


@click.command("install-overlap-guards")
@with_appcontext
def install_overlap_guards():
    """
    Add the room and instructor exclusion constraints to an existing PostgreSQL database.

    Safe to run repeatedly: constraints already present are skipped. Fails if
    overlapping sessions are already stored; resolve those first.
    """
    from gym_scheduler.models import OVERLAP_GUARD_STATEMENTS

    if db.engine.dialect.name != 'postgresql':
        click.echo(f"Skipped: overlap guards need PostgreSQL, not {db.engine.dialect.name}.")
        return

    with db.engine.begin() as conn:
        for name, statement in OVERLAP_GUARD_STATEMENTS:
            if name.startswith('excl_'):
                exists = conn.execute(
                    text("SELECT 1 FROM pg_constraint WHERE conname = :name"), {'name': name}
                ).first()
                if exists:
                    click.echo(f"  {name}: already present")
                    continue
            conn.execute(text(statement))
            click.echo(f"  {name}: installed")

    click.echo("Overlap guards are in place.")


@click.command("create-user")
@click.argument("email")
@click.option("--role", type=click.Choice(['superadmin', 'admin', 'manager', 'staff']), default='staff',
              show_default=True, help="User role")
@click.option("--gym", "gym_name", help="Gym name (required for every role except superadmin)")
@click.option("--first-name", default=None, help="First name")
@click.option("--last-name", default=None, help="Last name")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True, help="Password")
@with_appcontext
def create_user(email, role, gym_name, first_name, last_name, password):
    """
    Create a login account.

    Example usage:
        flask create-user owner@example.com --role admin --gym "Downtown Fitness"
    """
    from gym_scheduler.models import User, Gym, RoleType

    email = email.strip().lower()
    if User.query.filter_by(email=email).first():
        raise click.ClickException(f"User '{email}' already exists")

    gym = None
    if role != RoleType.SUPERADMIN:
        if not gym_name:
            raise click.ClickException("--gym is required for this role")
        gym = Gym.query.filter_by(name=gym_name).first()
        if gym is None:
            raise click.ClickException(f"Gym '{gym_name}' not found")

    try:
        user = User(email=email, role=role, gym_id=gym.id if gym else None,
                    first_name=first_name, last_name=last_name)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        click.echo(f"Error creating user: {str(e)}", err=True)
        raise

    click.echo(f"User '{email}' created with role {role}" + (f" in {gym.name}" if gym else ""))


@click.command("seed-demo")
@click.option("--gym", "gym_name", default="Demo Gym", show_default=True, help="Name of the demo gym")
@with_appcontext
def seed_demo(gym_name):
    """Create a demo gym with a trainer, members, classes and tomorrow's timetable."""
    from gym_scheduler.models import Gym, Staff, StaffPosition, Member, utcnow
    from gym_scheduler.services import CatalogService, SessionSchedulerService, EnrollmentService

    if Gym.query.filter_by(name=gym_name).first():
        raise click.ClickException(f"Gym '{gym_name}' already exists")

    try:
        gym = Gym(name=gym_name)
        db.session.add(gym)
        db.session.flush()

        trainer = Staff(gym_id=gym.id, first_name='Alex', last_name='Rivera', email='alex@demo.test',
                        position=StaffPosition.TRAINER)
        members = [
            Member(gym_id=gym.id, first_name='Sam', last_name='Lee', email='sam@demo.test'),
            Member(gym_id=gym.id, first_name='Jo', last_name='Park', email='jo@demo.test'),
        ]
        db.session.add_all([trainer, *members])
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        click.echo(f"Error seeding demo data: {str(e)}", err=True)
        raise

    duration = current_app.config['DEFAULT_CLASS_DURATION']
    capacity = current_app.config['DEFAULT_SESSION_CAPACITY']
    yoga = CatalogService.create_class(gym.id, {
        'name': 'Morning Yoga', 'category': 'yoga', 'duration': duration, 'capacity': capacity
    })
    hiit = CatalogService.create_class(gym.id, {
        'name': 'Lunchtime HIIT', 'category': 'hiit', 'duration': 45, 'capacity': capacity
    })

    tomorrow = (utcnow() + timedelta(days=1)).replace(hour=0, minute=0, second=0, microsecond=0)
    morning = SessionSchedulerService.create_session(
        gym.id, yoga.id, trainer.id,
        tomorrow.replace(hour=9), tomorrow.replace(hour=9) + timedelta(minutes=duration), 'Studio A'
    )
    SessionSchedulerService.create_session(
        gym.id, hiit.id, trainer.id,
        tomorrow.replace(hour=12), tomorrow.replace(hour=12, minute=45), 'Studio B'
    )
    for member in members:
        EnrollmentService.enroll(gym.id, morning.id, member.id)

    click.echo(f"Seeded '{gym.name}' ({gym.id}) with 2 classes, 2 sessions and {len(members)} members.")


@click.command("list-sessions")
@click.argument("date")
@click.option("--gym", "gym_name", default=None, help="Only sessions of this gym")
@with_appcontext
def list_sessions(date, gym_name):
    """
    Print the timetable of one day.

    Example usage:
        flask list-sessions 2024-05-06 --gym "Demo Gym"
    """
    from gym_scheduler.models import Gym
    from gym_scheduler.services import SessionSchedulerService, SchedulingError

    gym_id = None
    if gym_name:
        gym = Gym.query.filter_by(name=gym_name).first()
        if gym is None:
            raise click.ClickException(f"Gym '{gym_name}' not found")
        gym_id = gym.id

    try:
        sessions = SessionSchedulerService.list_sessions_by_date(gym_id, date)
    except SchedulingError as e:
        raise click.ClickException(e.message)

    if not sessions:
        click.echo(f"No sessions on {date}")
        return

    click.echo(f"{'Time':<13} {'Class':<25} {'Room':<12} {'Instructor':<22} {'Booked':<8} Status")
    click.echo("-" * 92)
    for s in sessions:
        click.echo(
            f"{s.start_time:%H:%M}-{s.end_time:%H:%M}   {s.fitness_class.name[:25]:<25} {s.room[:12]:<12} "
            f"{s.instructor.full_name[:22]:<22} {s.enrolled_count}/{s.effective_capacity:<6} {s.status}"
        )


def register_cli_commands(app):
    """
    Register all CLI commands with the Flask application.

    Args:
        app: Flask application instance
    """
    app.cli.add_command(init_database)
    app.cli.add_command(install_overlap_guards)
    app.cli.add_command(create_user)
    app.cli.add_command(seed_demo)
    app.cli.add_command(list_sessions)


# # Initialize system
# flask init-db
#
# # Create the first account
# flask create-user owner@example.com --role superadmin
#
# # Add the no-overlap constraints to a database created before they existed
# flask install-overlap-guards
