"""
Web application package for the algorithm visualizer.

Provides a FastAPI-based REST API over the solvers and a small static
frontend that animates tours and draws LMIS recursion trees in a browser.
"""
