"""ViewModel package for UI state and command surfaces.

Call context:
    ``pokedex/app/controller.py`` builds concrete viewmodels from this package;
    the presentation layer subscribes to their state and relays user intents.

Dependencies:
    Modules in this package depend on domain types, ports and use cases only.
    Concrete I/O adapters are injected from the app layer.

Responsibilities:
    - Own the loading state machine and its in-flight guards.
    - Expose observable ``LoaderState`` plus command intents.
    - Forward scroll/selection changes to restorable state.
"""
