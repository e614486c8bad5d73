"""
Options compiler for the build engine boundary.

This package translates a normalized build configuration into the flat,
statically-shaped options record the engine accepts.

Key Components:
- conditions: Tagged encoding of polymorphic rule conditions
- rules: Module rule tree compilation (default rules, user rules, oneOf)
- optimization: Optimization flags and split-chunk cache groups
- sections: Entry, target, output, externals, snapshot, experiments, node
- translator: Orchestrates every encoder into the canonical record

Design Principles:
- Determinism: Same input produces byte-for-byte identical output
- Validation: Fields that defaulting must fill are checked before use
- Explicitness: Union-typed values carry their discriminant in the data
"""

from options_adapter.compiler.canonicalizer import canonicalize_json
from options_adapter.compiler.conditions import encode_condition, encode_logical_conditions
from options_adapter.compiler.rule_use import UseChainContext, encode_use_chain
from options_adapter.compiler.rules import compile_module, compile_module_rule
from options_adapter.compiler.translator import translate_options

__all__ = [
    "translate_options",
    "compile_module",
    "compile_module_rule",
    "encode_condition",
    "encode_logical_conditions",
    "encode_use_chain",
    "UseChainContext",
    "canonicalize_json",
]
