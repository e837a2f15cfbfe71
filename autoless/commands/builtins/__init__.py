from autoless.commands.builtins.compile import compile_project
from autoless.commands.builtins.new_config import new_config
from autoless.commands.builtins.open_config import open_config
from autoless.commands.builtins.watch import watch
from autoless.commands.builtins.settings import settings
from autoless.commands.builtins.list_commands import list_commands
