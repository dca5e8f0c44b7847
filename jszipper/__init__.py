"""Build steps for the ``jszip`` packaging type.

``jszipper.unpack`` stages the runtime ``jszip`` dependencies of a project and
``jszipper.package`` zips the project's own content together with its
descriptor metadata.
"""

__all__: list[str] = []
