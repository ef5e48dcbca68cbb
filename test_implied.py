"""
Tests for implied name / photo / url inference.
"""

from bs4 import BeautifulSoup

from mf2_parser.implied import apply_implied_properties, implied_name, implied_photo, implied_url
from mf2_parser.main import MicroformatsParser
from mf2_parser.schemas import Item, TextValue

BASE = "https://example.com/"


def root(html):
    return BeautifulSoup(html, 'html5lib').body.find(True)


def properties(html, base_url=BASE):
    result = MicroformatsParser().parse(html, base_url)
    return result.items[0].to_dict()["properties"]


def test_name_from_own_img_alt():
    assert implied_name(root('<img class="h-card" alt="Amy" src="amy.jpg">')) == "Amy"


def test_name_from_own_abbr_title():
    assert implied_name(root('<abbr class="h-card" title="Amy Smith">AS</abbr>')) == "Amy Smith"


def test_name_from_only_child():
    assert implied_name(root('<div class="h-card"><img src="a.jpg" alt="Child Alt"></div>')) == "Child Alt"
    assert implied_name(root('<div class="h-card"><abbr title="Full">F</abbr></div>')) == "Full"
    assert implied_name(root('<div class="h-card"><a href="/x"> Link text </a></div>')) == "Link text"


def test_name_from_only_grandchild():
    node = root('<div class="h-card"><span><img src="a.jpg" alt="Deep"></span></div>')
    assert implied_name(node) == "Deep"


def test_name_ignores_marked_child():
    node = root('<div class="h-card"> Outer <img class="u-photo" src="a.jpg" alt="Alt"></div>')
    assert implied_name(node) == "Outer"


def test_name_falls_back_to_text():
    node = root('<div class="h-card"><span>Amy</span> <span>Smith</span></div>')
    assert implied_name(node) == "Amy Smith"


def test_photo_sources():
    assert implied_photo(root('<img class="h-card" src="me.jpg">'), BASE) == "https://example.com/me.jpg"
    assert implied_photo(root('<div class="h-card"><object data="me.svg"></object></div>'), BASE) == "https://example.com/me.svg"
    assert implied_photo(root('<div class="h-card"><video poster="p.png"></video></div>'), BASE) == "https://example.com/p.png"
    assert implied_photo(root('<div class="h-card"><a href="/x"><img src="n.png"></a></div>'), BASE) == "https://example.com/n.png"
    assert implied_photo(root('<div class="h-card">no photo</div>'), BASE) == ""


def test_url_sources():
    assert implied_url(root('<a class="h-card" href="/me">Me</a>'), BASE) == "https://example.com/me"
    assert implied_url(root('<div class="h-card"><a href="home">Home</a></div>'), BASE) == "https://example.com/home"
    assert implied_url(root('<div class="h-card"><span><a href="deep">D</a></span></div>'), None) == "deep"
    assert implied_url(root('<div class="h-card"><a class="u-url" href="/x">x</a></div>'), BASE) == ""


def test_explicit_properties_are_not_overridden():
    item = Item(types=["h-card"])
    item.add_property("name", TextValue(value="Explicit"))
    apply_implied_properties(item, root('<a class="h-card" href="/me">Implicit</a>'), BASE)

    assert item.properties["name"] == [TextValue(value="Explicit")]
    assert item.properties["url"] == [TextValue(value="https://example.com/me")]


def test_empty_inferences_leave_properties_absent():
    item = Item(types=["h-card"])
    apply_implied_properties(item, root('<div class="h-card">   </div>'), BASE)
    assert item.properties == {}


def test_item_with_only_marked_image():
    props = properties('<div class="h-card"><img class="u-logo" src="logo.png" alt="Logo"></div>')

    assert props == {"logo": ["https://example.com/logo.png"]}


def test_linked_photo_card():
    props = properties('<a class="h-card" href="/amy"><img src="/amy.jpg" alt="Amy"></a>')

    assert props == {
        "name": ["Amy"],
        "photo": ["https://example.com/amy.jpg"],
        "url": ["https://example.com/amy"],
    }
