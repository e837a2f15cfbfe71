import os
import functools
from collections import namedtuple

ProjectPath = namedtuple('ProjectPath', ['project', 'file'])


def _concat_cmp(a, b):
    """
    Order two roots by comparing their concatenations, a+b against b+a.
    """
    first, second = a + b, b + a
    return (first > second) - (first < second)


def resolve_project_path(path, project_roots):
    """
    Find the project a file belongs to.

    Every project root that is a prefix of the path is a candidate. Candidates are ordered by comparing their
    concatenations (a+b against b+a) rather than by length, so with multiple candidates the chosen root is not
    necessarily the closest.

    :param path: Absolute file path.
    :type path: str
    :param project_roots: Known project root directories.
    :type project_roots: list[str]
    :return: Project root and the path relative to it, or None if no project root contains the path.
    :rtype: ProjectPath | None
    """
    candidates = [root for root in project_roots if path.startswith(root)]
    if len(candidates) == 0:
        return None
    root = sorted(candidates, key=functools.cmp_to_key(_concat_cmp))[0]
    return ProjectPath(root, os.path.relpath(path, root))
