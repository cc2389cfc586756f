from event_registration.services.email_renderer import (
    render_email_template,
    render_subject,
    substitute_variables,
)


def test_substitute_variables_replaces_every_occurrence():
    result = substitute_variables("Hi {{firstName}}! {{firstName}}, see you.", {"firstName": "Ana"})

    assert result == "Hi Ana! Ana, see you."


def test_body_keeps_unknown_placeholders():
    html = render_email_template("<p>Hi {{firstName}} {{missingVar}}</p>", None, None, {"firstName": "Ana"})

    assert "<p>Hi Ana {{missingVar}}</p>" in html


def test_header_and_footer_blank_unknown_placeholders():
    html = render_email_template(
        "<p>Body</p>",
        "<h1>{{eventName}} {{missingVar}}</h1>",
        "<small>{{missingVar}}Bye</small>",
        {"eventName": "Tech Conference 2026"},
    )

    assert '<div class="email-header"><h1>Tech Conference 2026 </h1></div>' in html
    assert '<div class="email-footer"><small>Bye</small></div>' in html


def test_empty_header_and_footer_are_omitted():
    html = render_email_template("<p>Body</p>", "", None, {})

    assert 'class="email-header"' not in html
    assert 'class="email-footer"' not in html
    assert '<div class="email-body"><p>Body</p></div>' in html
    assert html.startswith("<!DOCTYPE html>")


def test_values_are_not_escaped():
    html = render_email_template("{{link}}", None, None, {"link": '<a href="x">x</a>'})

    assert '<a href="x">x</a>' in html


def test_render_subject():
    assert render_subject("Hi {{firstName}}", {"firstName": "Ana"}) == "Hi Ana"
    assert render_subject("Hi {{nickname}}", {"firstName": "Ana"}) == "Hi {{nickname}}"
