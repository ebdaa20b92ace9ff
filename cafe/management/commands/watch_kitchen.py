import signal
import threading

from django.core.management.base import BaseCommand, CommandError

from aws_lib.dynamodb_client import StoreError

from cafe.apps import get_session


class Command(BaseCommand):
    help = 'Show the live kitchen board in the terminal'

    def add_arguments(self, parser):
        parser.add_argument(
            '--interval',
            type=float,
            default=None,
            help='Seconds between DynamoDB polls (default: CAFE_POLL_INTERVAL)'
        )

    def handle(self, *args, **options):
        session = get_session()
        if options['interval']:
            session.feed.interval = options['interval']

        stop = threading.Event()
        signal.signal(signal.SIGINT, lambda *_: stop.set())
        signal.signal(signal.SIGTERM, lambda *_: stop.set())

        self.stdout.write(self.style.SUCCESS('Watching orders... (Ctrl+C to stop)'))

        try:
            subscription = session.feed.subscribe(self.render)
        except StoreError as e:
            raise CommandError(str(e)) from e

        with subscription:
            stop.wait()

        session.close()
        self.stdout.write('Stopped.')

    def render(self, board):
        # ANSI clear screen + cursor home
        self.stdout.write("\033[2J\033[H", ending='')
        for status, orders in board.columns():
            self.stdout.write(self.style.MIGRATE_HEADING(f'== {status.display_name} ({len(orders)}) =='))
            if not orders:
                self.stdout.write('  <none>')
            for order in orders:
                items = ', '.join(f'{name} x{qty}' for name, qty in order.sorted_items)
                self.stdout.write(
                    f'  #{order.order_number}  {order.formatted_time}  {items}  {order.formatted_total}'
                )
            self.stdout.write('')
