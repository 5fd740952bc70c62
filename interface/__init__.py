"""
Interface package: command-line access to the solvers.

Modules:
    cli - argparse front end (tour, lmis, layout, serve).
          Can be run as a standalone script: python interface/cli.py
"""
