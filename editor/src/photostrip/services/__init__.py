"""Editor services: session, asset loading, rendering and configuration.

Import from the submodules directly, e.g.
``from photostrip.services.editor_session import EditorSession``.
"""
