"""FastAPI dependencies: services are built once in main.create_app and parked on app.state."""
from fastapi import Request


def get_otp_store(request: Request):
    return request.app.state.otp_store


def get_notifier(request: Request):
    return request.app.state.notifier


def get_settings_provider(request: Request):
    return request.app.state.settings_provider


def get_verification(request: Request):
    return request.app.state.verification


def get_order_intake(request: Request):
    return request.app.state.order_intake


def get_identity(request: Request):
    return request.app.state.identity


def get_order_repo(request: Request):
    return request.app.state.order_repo


def get_catalog(request: Request):
    return request.app.state.catalog
