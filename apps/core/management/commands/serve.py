import logging

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.db.utils import OperationalError

from config.database import check_database_connection

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Checks the database connection, then serves the API with uvicorn.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--host',
            default=settings.HOST,
            help='Interface to bind (default: HOST env or 0.0.0.0)',
        )
        parser.add_argument(
            '--port',
            type=int,
            default=settings.PORT,
            help='Port to listen on (default: PORT env or 8000)',
        )
        parser.add_argument(
            '--reload',
            action='store_true',
            help='Restart the server when code changes (development only)',
        )

    def handle(self, *args, **options):
        try:
            check_database_connection()
        except OperationalError as e:
            logger.error(f"Database connection failed: {e}")
            raise CommandError(f"Cannot connect to the database: {e}")

        self.stdout.write(self.style.SUCCESS(
            f"Database connected. Serving on {options['host']}:{options['port']}"
        ))

        import uvicorn
        uvicorn.run(
            'config.asgi:application',
            host=options['host'],
            port=options['port'],
            reload=options['reload'],
            log_level=settings.LOG_LEVEL.lower(),
        )
