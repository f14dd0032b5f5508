"""Prowl — data-driven route expansion for static sites.

Expands parameterized route templates such as ``/blog/:category/:slug``
against a content API: each parameter is one level of fetches whose values
feed the templates of the parameters to its right.

Quick start::

    import prowl

    result = prowl.generate("my-site/")   # reads my-site/prowl.yaml
    for handled in result.routes:
        print(handled.route)

Inside an event loop::

    from prowl import load_config
    from prowl.app import generate_async

    result = await generate_async(load_config(Path("my-site/")))

"""

__version__ = "0.1.0-dev"
__all__ = [
    "HandledRoute",
    "ProwlConfig",
    "__version__",
    "generate",
    "load_config",
    "validate",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import prowl`` fast while providing a clean top-level API.
    """
    if name == "ProwlConfig":
        from prowl.config import ProwlConfig

        return ProwlConfig

    if name == "HandledRoute":
        from prowl.expand.materialize import HandledRoute

        return HandledRoute

    if name == "load_config":
        from prowl.config_loader import load_config

        return load_config

    if name == "generate":
        from prowl.app import generate

        return generate

    if name == "validate":
        from prowl.app import validate

        return validate

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
