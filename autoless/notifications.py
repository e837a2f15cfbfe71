import logging
from collections import namedtuple

SUCCESS = 'success'
INFO = 'info'
WARNING = 'warning'
ERROR = 'error'

Notification = namedtuple('Notification', ['level', 'message', 'detail', 'stack', 'dismissable', 'buttons'])

NotificationButton = namedtuple('NotificationButton', ['text', 'on_click'])

_log_levels = {
    SUCCESS: logging.INFO,
    INFO: logging.INFO,
    WARNING: logging.WARNING,
    ERROR: logging.ERROR
}


class Notifier:
    """
    Collects user facing notifications, mirroring each one to a logger.
    """
    def __init__(self, log=None):
        """
        :param log: Logger to write notifications to. Defaults to the 'autoless' logger.
        :type log: logging.Logger | None
        """
        self.log = log if log is not None else logging.getLogger('autoless')
        self.notifications = []
        """:type: list[Notification]"""

    def add(self, level, message, detail=None, stack=None, dismissable=False, buttons=None):
        """
        :type level: str
        :type message: str
        :type detail: str | None
        :type stack: str | None
        :type dismissable: bool
        :type buttons: list[NotificationButton] | None
        :rtype: Notification
        """
        notification = Notification(level, message, detail, stack, dismissable, list(buttons or []))
        self.notifications.append(notification)

        if detail:
            self.log.log(_log_levels[level], '%s\n%s', message, detail.rstrip('\n'))
        else:
            self.log.log(_log_levels[level], message)
        if stack:
            self.log.debug(stack)
        return notification

    def add_success(self, message, **kwargs):
        return self.add(SUCCESS, message, **kwargs)

    def add_warning(self, message, **kwargs):
        return self.add(WARNING, message, **kwargs)

    def add_error(self, message, **kwargs):
        return self.add(ERROR, message, **kwargs)
