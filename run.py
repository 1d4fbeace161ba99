import argparse
import logging
import sys

import uvicorn

from relcrawl import config as env
from relcrawl.api.server import create_app
from relcrawl.container import Container
from relcrawl.domain.page_location import PageLocation
from relcrawl.exceptions import CrawlBusyError, OwnerNotResolvedError, RetryLimitExceededError, SettingsError

logger = logging.getLogger("relcrawl.run")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="relcrawl", description="Export following/follower lists as CSV or JSON")
    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", help="run the control API")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)

    export = sub.add_parser("export", help="export one relation list and exit")
    export.add_argument("--format", choices=["csv", "json"], default="csv")
    export.add_argument("--url", required=True, help="page URL, e.g. https://www.pixiv.net/users/1/following?p=2")
    export.add_argument("--title", default=None, help="page title used for the CSV file name")
    return parser


def run_export(container: Container, args) -> int:
    service = container.export_service()
    location = PageLocation.from_url(args.url, title=args.title)
    try:
        outcome = service.run(args.format, location, page_title=args.title)
    except OwnerNotResolvedError as e:
        logger.error("%s", e)
        return 2
    except CrawlBusyError as e:
        logger.error("%s", e)
        return 1
    except SettingsError as e:
        logger.error("%s", e)
        return 3
    except RetryLimitExceededError as e:
        logger.error("%s", e)
        return 4

    if outcome.saved_to:
        print(outcome.saved_to)
    return 0


def main(container: Container = None, argv=None) -> int:
    logging.basicConfig(
        level=env.log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    container = container or Container()
    args = build_parser().parse_args(argv)

    if args.command == "export":
        return run_export(container, args)

    host = getattr(args, "host", "0.0.0.0")
    port = getattr(args, "port", 8000)
    logger.info("Control server listening on %s:%s", host, port)
    uvicorn.run(create_app(container), host=host, port=port)
    return 0


if __name__ == '__main__':
    sys.exit(main())
