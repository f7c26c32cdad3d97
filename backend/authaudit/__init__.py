"""
Supergraph Authorization Audit

Static checker for federated GraphQL supergraphs: finds places where the
declared @authenticated, @requiresScopes and @policy requirements disagree
across interfaces, subgraphs and transitive field dependencies.
"""

__version__ = "0.1.0"
