# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

import pytest
from pydantic import ValidationError

from page_accessibility_utility.audit.color_contrast import BLACK


def test_xpath_counts_same_tag_siblings(make_document, make_inspector):
    document = make_document("<p>intro</p><div>a</div><div id='target'>b</div>")
    inspector = make_inspector(document)

    assert inspector.xpath(document.get_element_by_id("target")) == "/html[1]/body[1]/div[2]"


def test_inspect_snapshot(make_document, make_inspector):
    document = make_document('<img id="logo" class="brand" src="logo.png" alt="Acme" width="10">')
    inspector = make_inspector(document)
    image = document.get_element_by_id("logo")

    info = inspector.inspect(image)
    assert info.tag_name == "img"
    assert info.id == "logo"
    assert info.class_name == "brand"
    assert info.attributes["alt"] == "Acme"
    assert info.bounding_rect.width == 10.0
    assert inspector.inspect(image) is info


def test_snapshot_is_immutable(make_document, make_inspector):
    document = make_document("<p>Text</p>")
    info = make_inspector(document).inspect(document.select("p")[0])

    with pytest.raises(ValidationError):
        info.tag_name = "div"


def test_text_snapshot_is_truncated(make_document, make_inspector):
    document = make_document(f"<p>{'word ' * 50}</p>")
    info = make_inspector(document).inspect(document.select("p")[0])

    assert len(info.text_content) == 100


@pytest.mark.parametrize(
    "body,expected",
    [
        ("<p id='t'>Shown</p>", True),
        ("<p id='t' hidden>Hidden</p>", False),
        ("<p id='t' style='display: none'>Hidden</p>", False),
        ("<p id='t' style='visibility: hidden'>Hidden</p>", False),
        ("<div style='opacity: 0'><p id='t'>Faded</p></div>", False),
        ("<div style='display:none'><p id='t'>Inside</p></div>", False),
        ("<img id='t' src='a.png' width='0' height='10'>", False),
        ("<input id='t' type='hidden'>", False),
    ],
)
def test_is_visible(make_document, make_inspector, body, expected):
    document = make_document(body)

    assert make_inspector(document).is_visible(document.get_element_by_id("t")) is expected


def test_detached_element_is_not_visible(make_document, make_inspector):
    document = make_document("<p id='t'>Text</p>")
    paragraph = document.get_element_by_id("t")
    paragraph.extract()

    assert not make_inspector(document).is_visible(paragraph)


@pytest.mark.parametrize(
    "body,expected",
    [
        ("<button id='t'>Go</button>", 0),
        ("<a id='t' href='/x'>Link</a>", 0),
        ("<a id='t'>Anchor</a>", None),
        ("<div id='t'>Plain</div>", None),
        ("<div id='t' tabindex='-1'>Script focus</div>", -1),
        ("<div id='t' tabindex='3'>First</div>", 3),
        ("<div id='t' tabindex='abc'>Bad</div>", None),
        ("<div id='t' contenteditable='true'>Edit</div>", 0),
    ],
)
def test_tab_index(make_document, make_inspector, body, expected):
    document = make_document(body)

    assert make_inspector(document).tab_index(document.get_element_by_id("t")) == expected


def test_focusability(make_document, make_inspector):
    document = make_document(
        "<button id='off' disabled>Off</button>"
        "<div id='script' tabindex='-1'>Script</div>"
        "<button id='on'>On</button>"
    )
    inspector = make_inspector(document)

    assert not inspector.is_focusable(document.get_element_by_id("off"))
    assert inspector.is_focusable(document.get_element_by_id("script"))
    assert not inspector.is_in_tab_order(document.get_element_by_id("script"))
    assert inspector.is_in_tab_order(document.get_element_by_id("on"))


def test_aria_attributes(make_document, make_inspector):
    document = make_document("<div id='t' role='tab' aria-selected='true' class='x'>Tab</div>")

    assert make_inspector(document).aria_attributes(document.get_element_by_id("t")) == {
        "role": "tab",
        "aria-selected": "true",
    }


@pytest.mark.parametrize(
    "body,expected",
    [
        ("<span id='name'>Search</span><button id='t' aria-labelledby='name'>Go</button>", "Search"),
        ("<button id='t' aria-label='Close dialog'>X</button>", "Close dialog"),
        ("<img id='t' src='a.png' alt='Company logo'>", "Company logo"),
        ("<label for='t'>Email</label><input id='t' type='email'>", "Email"),
        ("<label>Name <input id='t'></label>", "Name"),
        ("<input id='t' type='submit' value='Send'>", "Send"),
        ("<a id='t' href='/'><img src='home.png' alt='Home'></a>", "Home"),
        ("<a id='t' href='/' title='Start page'></a>", "Start page"),
        ("<input id='t'>", ""),
    ],
)
def test_accessible_name(make_document, make_inspector, body, expected):
    document = make_document(body)

    assert make_inspector(document).accessible_name(document.get_element_by_id("t")) == expected


def test_effective_background_uses_nearest_opaque_ancestor(make_document, make_inspector):
    document = make_document(
        "<div style='background-color: #000000'><section><p id='t'>Text</p></section></div>"
    )

    assert make_inspector(document).effective_background(document.get_element_by_id("t")) == BLACK


def test_effective_background_composites_translucent_layers(make_document, make_inspector):
    document = make_document("<div style='background: rgba(0, 0, 0, 0.5) url(x.png)'><p id='t'>Text</p></div>")
    background = make_inspector(document).effective_background(document.get_element_by_id("t"))

    assert background[:3] == pytest.approx((127.5, 127.5, 127.5))
    assert background[3] == pytest.approx(1.0)


def test_effective_background_defaults_to_white(make_document, make_inspector):
    document = make_document("<p id='t'>Text</p>")

    assert make_inspector(document).effective_background(document.get_element_by_id("t"))[:3] == (
        255.0,
        255.0,
        255.0,
    )
