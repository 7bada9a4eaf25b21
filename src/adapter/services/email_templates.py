"""
Email templates keyed by name.

Each template renders a subject, a plain-text body and an HTML body with
str.format placeholders.
"""

from typing import Any, Dict, NamedTuple


class EmailTemplate(NamedTuple):
    subject: str
    plain_body: str
    html_body: str


class RenderedEmail(NamedTuple):
    subject: str
    plain_body: str
    html_body: str


TEMPLATES: Dict[str, EmailTemplate] = {
    "user_welcome": EmailTemplate(
        subject="Welcome to Greenlight!",
        plain_body=(
            "Hi,\n\n"
            "Thanks for signing up for a Greenlight account. We're excited to have you on board!\n\n"
            "For future reference, your user ID number is {user_id}.\n\n"
            "Please send a request to the `PUT /v1/users/activated` endpoint with the "
            "following JSON body to activate your account:\n\n"
            '{{"token": "{activation_token}"}}\n\n'
            "Please note that this is a one-time use token and it will expire in 3 days.\n\n"
            "Thanks,\n\nThe Greenlight Team\n"
        ),
        html_body=(
            "<p>Hi,</p>"
            "<p>Thanks for signing up for a Greenlight account. We're excited to have you on board!</p>"
            "<p>For future reference, your user ID number is {user_id}.</p>"
            "<p>Please send a request to the <code>PUT /v1/users/activated</code> endpoint with the "
            "following JSON body to activate your account:</p>"
            '<pre><code>{{"token": "{activation_token}"}}</code></pre>'
            "<p>Please note that this is a one-time use token and it will expire in 3 days.</p>"
            "<p>Thanks,</p><p>The Greenlight Team</p>"
        ),
    ),
    "token_activation": EmailTemplate(
        subject="Activate your Greenlight account",
        plain_body=(
            "Hi,\n\n"
            "Please send a `PUT /v1/users/activated` request with the following JSON body "
            "to activate your account:\n\n"
            '{{"token": "{activation_token}"}}\n\n'
            "Please note that this is a one-time use token and it will expire in 3 days.\n\n"
            "Thanks,\n\nThe Greenlight Team\n"
        ),
        html_body=(
            "<p>Hi,</p>"
            "<p>Please send a <code>PUT /v1/users/activated</code> request with the following "
            "JSON body to activate your account:</p>"
            '<pre><code>{{"token": "{activation_token}"}}</code></pre>'
            "<p>Please note that this is a one-time use token and it will expire in 3 days.</p>"
            "<p>Thanks,</p><p>The Greenlight Team</p>"
        ),
    ),
    "token_password_reset": EmailTemplate(
        subject="Reset your Greenlight password",
        plain_body=(
            "Hi,\n\n"
            "Please send a `PUT /v1/users/password` request with the following JSON body "
            "to set a new password:\n\n"
            '{{"password": "your new password", "token": "{password_reset_token}"}}\n\n'
            "Please note that this is a one-time use token and it will expire in 45 minutes. "
            "If you need another token please make a `POST /v1/tokens/password-reset` request.\n\n"
            "Thanks,\n\nThe Greenlight Team\n"
        ),
        html_body=(
            "<p>Hi,</p>"
            "<p>Please send a <code>PUT /v1/users/password</code> request with the following "
            "JSON body to set a new password:</p>"
            '<pre><code>{{"password": "your new password", "token": "{password_reset_token}"}}</code></pre>'
            "<p>Please note that this is a one-time use token and it will expire in 45 minutes. "
            "If you need another token please make a <code>POST /v1/tokens/password-reset</code> "
            "request.</p>"
            "<p>Thanks,</p><p>The Greenlight Team</p>"
        ),
    ),
}


def render(template: str, data: Dict[str, Any]) -> RenderedEmail:
    """Render a named template; unknown names raise KeyError"""
    source = TEMPLATES[template]
    return RenderedEmail(
        subject=source.subject.format(**data),
        plain_body=source.plain_body.format(**data),
        html_body=source.html_body.format(**data),
    )
