"""Gluon Integration Package.

- client: requests based REST client returning OperationResult
- service: async team/project/application/tenant/member lookups and requests
"""
