"""Compile LESS projects whenever their sources are saved.

Usage:
  autoless [options] [--project=DIR]... <command> [<args>...]
  autoless (-h | --help)
  autoless --version

Options:
  -p DIR --project=DIR     Project root, may be given more than once [default: .]
  -s FILE --settings=FILE  Settings file [default: ~/.autoless.json]
  -l DIR --log-dir=DIR     Write a rotating log file to DIR
  -h --help                Show this screen.
  --version                Show version.

Run 'autoless commands' for the list of available commands.
"""
import sys
from docopt import docopt


def main(argv=None):
    """
    Command line entry point.

    :param argv: Arguments, defaults to sys.argv[1:].
    :type argv: list[str] | None
    :return: Exit status.
    :rtype: int
    """
    from autoless import __version__
    from autoless.app import App, AppError, COMPILE_FAILED, VALIDATION_FAILED, configure_logging
    from autoless.app.settings import Settings
    from autoless.commands import CommandError

    args = docopt(__doc__, argv=argv, version=__version__)

    try:
        configure_logging(args['--log-dir'])
        settings = Settings(args['--settings'])
        app = App(args['--project'], settings=settings)
        result = app.run_command(args['<command>'], *args['<args>'])
    except (AppError, CommandError) as e:
        print('Error: {0}'.format(e), file=sys.stderr)
        return 1

    if getattr(result, 'outcome', None) in (COMPILE_FAILED, VALIDATION_FAILED):
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
