"""Built-in CLI sub-commands for azert-http.

* :mod:`~azert_http.commands.request` -- ``get``, ``post``, ``put`` and
  ``delete``, registered directly on the root app.
* :mod:`~azert_http.commands.cache` -- inspect and clear the disk cache.
* :mod:`~azert_http.commands.config` -- view and modify global settings.
"""
