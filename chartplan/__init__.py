"""chartplan: relationship graph, pattern and best-practice analysis of Kubernetes resources.

Consumes already-processed resources and recommends how to package them
into Helm charts.
"""

__version__ = "0.1.0"
