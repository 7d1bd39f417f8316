"""Built-in CLI sub-commands for the ``clicomplete`` program.

* :mod:`~clicomplete.commands.config` -- view and modify the settings used
  by the completion script and query.
"""
