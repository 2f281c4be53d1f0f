"""Runnable services, the manager that starts and stops them, and HTTP listeners."""