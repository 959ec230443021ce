"""Shared fixtures: invitation mail files and confirmation pages."""

import pytest


ACCEPT_URL = "http://mandrillapp.example/track/abc"


def build_mail(subject="Your Yoga class is open for reservation", body=None):
    """Build raw RFC 5322 bytes with a quoted-printable HTML body."""
    if body is None:
        body = (
            '<html><body><p>Your class is open for reservation.</p>\n'
            '<a href=3D"' + ACCEPT_URL + '">Accept</a> <a href=3D"http://example.com/no">Decline</a>\n'
            '</body></html>\n'
        )
    headers = [
        "From: Reservations <noreply@example.com>",
        "To: athlete@example.com",
    ]
    if subject is not None:
        headers.append(f"Subject: {subject}")
    headers += [
        "MIME-Version: 1.0",
        "Content-Type: text/html; charset=utf-8",
        "Content-Transfer-Encoding: quoted-printable",
    ]
    return ("\n".join(headers) + "\n\n" + body).encode("utf-8")


def build_page(
    status="You're in!",
    details=(
        "<span>Date:\xa015, October 2024</span>"
        "<span>Start time:\xa0Tuesday at 18:30</span>"
        "<span>End time:\xa019:30</span>"
        "<span>Program:\xa0Vinyasa Flow </span>"
        "<span>Location:\xa0Studio 1</span>"
    ),
    id_prefix="AthleteTheme_wt12_block_",
):
    """Build a confirmation page; pass None to leave a block out."""
    parts = ['<html><head><meta charset="utf-8"></head><body><div class="Page">']
    if status is not None:
        parts.append(f'<div id="{id_prefix}wtTitle">{status}</div>')
    if details is not None:
        parts.append(f'<div id="{id_prefix}wtMainContent">{details}</div>')
    parts.append("</div></body></html>")
    return "".join(parts).encode("utf-8")


@pytest.fixture
def write_mail(tmp_path):
    """Write mail bytes into tmp_path and return the path."""
    def _write(content, name="invitation.eml"):
        path = tmp_path / name
        path.write_bytes(content)
        return path
    return _write


@pytest.fixture
def mail_builder():
    return build_mail


@pytest.fixture
def page_builder():
    return build_page


@pytest.fixture
def accept_url():
    return ACCEPT_URL
