"""
Module rule compilation.

Compiles the normalized module options into the engine's rule list:
built-in default rules first, then user rules, each rule's condition fields
encoded as tagged conditions and its "oneOf" sub-rules compiled recursively.

Encoding is structure-preserving: fields present in a rule are present in
its output, absent fields stay absent, and nothing is reordered or dropped.
"""

import logging
from collections.abc import Mapping
from typing import Any

from options_adapter.compiler.conditions import encode_condition, is_absent_condition
from options_adapter.compiler.preconditions import require_fields
from options_adapter.compiler.rule_use import UseChainContext, UseChainEncoder, encode_use_chain

logger = logging.getLogger(__name__)

# Condition fields, encoded via encode_condition
RULE_CONDITION_FIELDS = ("test", "include", "exclude", "resource", "resourceQuery", "issuer")

# Opaque fields copied through unchanged
RULE_PASSTHROUGH_FIELDS = ("type", "parser", "generator", "resolve", "sideEffects")


def compile_module_rule(
    rule: Mapping[str, Any],
    context: UseChainContext,
    use_encoder: UseChainEncoder = encode_use_chain,
    path: str = "$",
) -> dict[str, Any]:
    """
    Compile one module rule, recursing into its "oneOf" sub-rules.

    An empty condition text is treated as absent and omitted; it never
    becomes a string matcher that matches every resource. No semantic
    checks happen here (conflicting include/exclude and the like are left
    to the engine).

    Args:
        rule: Normalized module rule
        context: Loader-chain encoding context
        use_encoder: Loader-chain encoder, receives [] when "use" is absent
        path: JSONPath to this rule (for error reporting)

    Returns:
        Encoded module rule dictionary
    """
    compiled: dict[str, Any] = {}

    for field in RULE_CONDITION_FIELDS:
        value = rule.get(field)
        if not is_absent_condition(value):
            compiled[field] = encode_condition(value, f"{path}.{field}")

    for field in RULE_PASSTHROUGH_FIELDS:
        value = rule.get(field)
        if value is not None:
            compiled[field] = value

    use = rule.get("use")
    compiled["use"] = use_encoder(use if use is not None else [], context)

    one_of = rule.get("oneOf")
    if one_of is not None:
        compiled["oneOf"] = [
            compile_module_rule(sub_rule, context, use_encoder, f"{path}.oneOf[{i}]")
            for i, sub_rule in enumerate(one_of)
        ]

    return compiled


def compile_module(
    module: Mapping[str, Any],
    context: UseChainContext,
    use_encoder: UseChainEncoder = encode_use_chain,
) -> dict[str, Any]:
    """
    Compile the module section into the engine's rule set.

    Default rules always precede user rules; the engine evaluates them in
    list order, so the concatenation order is fixed and nothing is
    deduplicated.

    Args:
        module: Normalized module options ("defaultRules", "rules", "parser")
        context: Loader-chain encoding context
        use_encoder: Loader-chain encoder passed to every rule

    Returns:
        {"rules": [...], "parser": ...} with "parser" omitted when absent

    Raises:
        PreconditionViolation: If module.defaultRules is missing
    """
    require_fields("module", module, ("defaultRules",))

    default_rules = list(module["defaultRules"])
    user_rules = list(module.get("rules") or [])

    rules = [
        compile_module_rule(rule, context, use_encoder, f"$.defaultRules[{i}]")
        for i, rule in enumerate(default_rules)
    ]
    rules.extend(
        compile_module_rule(rule, context, use_encoder, f"$.rules[{i}]")
        for i, rule in enumerate(user_rules)
    )

    logger.debug(
        "Compiled %d module rules (%d default, %d user)",
        len(rules),
        len(default_rules),
        len(user_rules),
    )
    if not rules:
        logger.warning("Module section compiled to an empty rule list")

    compiled: dict[str, Any] = {"rules": rules}
    if module.get("parser") is not None:
        compiled["parser"] = module["parser"]
    return compiled
