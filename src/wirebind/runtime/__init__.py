"""Runtime support for compiled attribute bindings."""
