import os
import sys
import json
import logging
import argparse
from dataclasses import dataclass, field

from postsync.config import load_config
from postsync.errors import ConfigError, ContentReadError, PostSyncError
from postsync.logger import add_file_handler, logger
from postsync.parser import ContentParser
from postsync.publisher import PostPublisher

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


@dataclass
class BatchResult:
    posts: list = field(default_factory=list)
    failures: dict = field(default_factory=dict)

    @property
    def failed(self):
        return bool(self.failures)


class ContentSyncEngine:
    """Reads every post in the content directory and pushes it to the endpoint"""

    def __init__(self, config, publisher=None):
        self.config = config
        self.directory = config.directory
        self.parser = ContentParser(config.slug_mode)
        self.publisher = publisher

        logger.info(f"📂 Source: {self.directory}")
        logger.info(f"🔗 Slugs from: {self.config.slug_mode.value}")
        if config.dry_run:
            logger.info("🧪 Dry run: nothing will be sent")
        else:
            logger.info(f"🌐 Endpoint: {self.config.endpoint}")

    def _list_entries(self):
        try:
            return sorted(os.listdir(self.directory))
        except OSError as e:
            raise ContentReadError(f"Could not read directory {self.directory}: {e}") from e

    def collect_posts(self):
        """Parse every entry; one bad file marks the whole batch as failed."""
        result = BatchResult()

        for name in self._list_entries():
            try:
                post = self.parser.parse_file(os.path.join(self.directory, name))
            except PostSyncError as e:
                logger.error(f"❌ Error in file {name}: {e}")
                result.failures[name] = e
                continue
            result.posts.append(post)

        logger.info(f"📄 Parsed {len(result.posts)} post(s), {len(result.failures)} failure(s)")
        return result

    def _preview(self, posts):
        for post in posts:
            payload = json.dumps(post.to_payload(), indent=1, ensure_ascii=False)
            logger.info(f"📝 {post.filename}:\n{payload}")

    def run(self):
        try:
            batch = self.collect_posts()
        except ContentReadError as e:
            logger.error(f"❌ {e}")
            return EXIT_FAILED

        if batch.failed:
            logger.error(f"🛑 {len(batch.failures)} invalid file(s), nothing was submitted")
            return EXIT_FAILED

        if self.config.dry_run:
            self._preview(batch.posts)
            return EXIT_OK

        if not self.config.endpoint:
            logger.error("❌ No endpoint configured (use --endpoint or POSTSYNC_ENDPOINT)")
            return EXIT_USAGE

        publisher = self.publisher or PostPublisher(self.config.endpoint, timeout=self.config.timeout)
        try:
            accepted = publisher.submit_all(batch.posts)
        finally:
            if self.publisher is None:
                publisher.close()

        logger.info(f"✅ Submitted {accepted}/{len(batch.posts)} post(s)")
        return EXIT_OK


def build_arg_parser():
    parser = argparse.ArgumentParser(
        description="Sync +++ front-matter posts to a JSON endpoint",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check every post without sending anything
  python main.py --directory content/posts --dry-run

  # Send posts, slugs taken from the file names
  python main.py --endpoint https://example.com/api/posts --use-filename
        """
    )
    parser.add_argument('--config', '-c', type=str,
                        help='JSON config file (same keys as the POSTSYNC_* variables)')
    parser.add_argument('--directory', '-d', type=str,
                        help='Directory holding the content files')
    parser.add_argument('--endpoint', '-e', type=str,
                        help='URL every post is POSTed to')
    parser.add_argument('--use-filename', dest='use_filename_as_url',
                        action='store_const', const=True,
                        help='Build URLs from file names instead of titles')
    parser.add_argument('--timeout', type=float,
                        help='Per-request timeout in seconds (default: none)')
    parser.add_argument('--dry-run', action='store_const', const=True,
                        help='Validate and print payloads without sending them')
    parser.add_argument('--log-file', type=str,
                        help='Also write the log to this file')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Debug logging (includes response bodies)')
    return parser


def main(argv=None):
    args = build_arg_parser().parse_args(argv)

    try:
        config = load_config(
            args.config,
            directory=args.directory,
            endpoint=args.endpoint,
            use_filename_as_url=args.use_filename_as_url,
            timeout=args.timeout,
            dry_run=args.dry_run,
            log_file=args.log_file,
        )
    except ConfigError as e:
        logger.error(str(e))
        return EXIT_USAGE

    previous_level = logger.level
    if args.verbose:
        logger.setLevel(logging.DEBUG)
    file_handler = add_file_handler(logger, config.log_file) if config.log_file else None

    try:
        return ContentSyncEngine(config).run()
    finally:
        if file_handler:
            logger.removeHandler(file_handler)
            file_handler.close()
        logger.setLevel(previous_level)


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()
