"""Infrastructure Layer — database access, repositories, and logging setup.

Invariants:
    - Infrastructure implements the protocols in core/repository_protocols.py
    - Repository methods return Outcomes; database exceptions never reach services
"""
