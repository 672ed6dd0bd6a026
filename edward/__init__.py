"""edward — generate and maintain local multi-service configurations.

Quickstart::

    from edward.client import Client

    client = Client(config_path="edward.json")
    client.generate([], force=False, group="", targets=[])
"""

__version__ = "1.0.0"

#: Schema version stamped into newly created config files.
EDWARD_VERSION = __version__
