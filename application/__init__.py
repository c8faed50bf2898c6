"""
Application Layer for the exercise catalog content engine.

This package contains:
- ports/: Abstract repository interfaces (what the domain needs)
- use_cases/: Orchestration of the pure core with the repositories
- exceptions.py: Errors shared by the core, application and infrastructure
"""
