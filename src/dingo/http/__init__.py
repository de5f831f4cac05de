"""HTTP primitives: immutable request, mutable response sink, headers."""
