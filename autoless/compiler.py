"""
LESS compiler invocation
Runs the external lessc compiler for a project, and digs error locations out of its output.
"""
import os
import re
import shlex
import logging
import traceback
import subprocess
from collections import namedtuple

log = logging.getLogger(__name__)

_ansi_regex = re.compile(r'[\u001b\u009b][\[()#;?]*(?:[0-9]{1,4}(?:;[0-9]{0,4})*)?[0-9A-ORZcf-nqry=><]')

CompileResult = namedtuple('CompileResult', ['success', 'source_file', 'message', 'stack'])

ErrorReference = namedtuple('ErrorReference', ['path', 'row', 'column'])


class CompilerError(Exception):
    pass


def strip_ansi(text):
    """
    Remove ANSI escape sequences (colours, cursor movement) from text.

    :type text: str
    :rtype: str
    """
    return _ansi_regex.sub('', text)


def find_error_reference(project_root, message):
    """
    Find the file, line and column an error occurred at, from a compiler error message. The second line of the message
    is expected to contain '<path> on line <line>, column <column>:', with the path under the project root.

    :param project_root: Project root the referenced file should be under.
    :type project_root: str
    :param message: Compiler error message, with ANSI escape sequences already stripped.
    :type message: str
    :return: Reference with 0-based row and column, or None if no reference could be found.
    :rtype: ErrorReference | None
    """
    if not message:
        return None
    try:
        lines = message.split('\n')
        if len(lines) < 2:
            return None
        regex = re.compile(r'({0}\S+) on line (\d+), column (\d+):'.format(re.escape(project_root)))
        match = regex.search(lines[1])
        if match is not None:
            return ErrorReference(match.group(1), int(match.group(2)) - 1, int(match.group(3)) - 1)
    except Exception as e:
        log.debug('Failed to determine error reference: %s', e)
    return None


class LessCompiler:
    """
    Compiles a projects main LESS file to CSS with an external lessc binary.
    """
    minify_flag = '--clean-css'

    def __init__(self, binary='lessc'):
        """
        :param binary: Compiler command. May include arguments, it is split shell-style.
        :type binary: str
        """
        self.binary = binary

    def build_command(self, project_root, config):
        """
        :type project_root: str
        :type config: autoless.app.config.ProjectConfig
        :rtype: list[str]
        """
        command = shlex.split(self.binary)
        command.append('{0}/{1}'.format(project_root, config.source_file))
        command.append('{0}/{1}'.format(project_root, config.target_file))
        if config.minify:
            command.append(self.minify_flag)
        return command

    def compile(self, project_root, config):
        """
        Run the compiler, blocking until it exits.

        :type project_root: str
        :type config: autoless.app.config.ProjectConfig
        :return: Result of the compilation. Failed results carry the compilers output as the message.
        :rtype: CompileResult
        """
        command = self.build_command(project_root, config)
        log.debug('Running \'%s\'', ' '.join(command))
        try:
            proc = subprocess.Popen(command,
                                    stdout=subprocess.PIPE,
                                    stderr=subprocess.PIPE,
                                    cwd=project_root if os.path.isdir(project_root) else None)
            stdout, stderr = proc.communicate()
            if proc.returncode != 0:
                output = stderr.decode('utf-8', 'replace') + stdout.decode('utf-8', 'replace')
                raise CompilerError('Command failed: {0}\n{1}'.format(' '.join(command), output))
        except (CompilerError, OSError) as e:
            return CompileResult(False, config.source_file, strip_ansi(str(e)), strip_ansi(traceback.format_exc()))
        return CompileResult(True, config.source_file, None, None)
