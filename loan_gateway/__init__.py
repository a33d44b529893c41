"""
Loan Gateway - Lending API & Asynchronous Loan Approval Pipeline

A FastAPI-based service that manages borrowers and loans, and hands
loan approval requests off to a durable RabbitMQ work queue where a
decision consumer evaluates them.
"""

__version__ = "0.1.0"
