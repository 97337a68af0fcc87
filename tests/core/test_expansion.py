import pytest

from urimold.core.expansion import (
    VarSpec,
    expand,
    expand_expression,
    parse_expression,
    parse_varspec,
)
from urimold.core.operators import SIMPLE, lookup
from urimold.errors import InvalidVarSpecError, TemplateParseError

# Variable set from RFC 6570 section 3.2
VARIABLES = {
    "count": ["one", "two", "three"],
    "dom": ["example", "com"],
    "dub": "me/too",
    "hello": "Hello World!",
    "half": "50%",
    "var": "value",
    "who": "fred",
    "base": "http://example.com/home/",
    "path": "/foo/bar",
    "list": ["red", "green", "blue"],
    "keys": {"semi": ";", "dot": ".", "comma": ","},
    "v": "6",
    "x": "1024",
    "y": "768",
    "empty": "",
    "empty_list": [],
    "empty_keys": {},
    "undef": None,
}


class TestParseVarSpec:
    def test_plain_name(self):
        assert parse_varspec("var") == VarSpec("var")

    def test_prefix_modifier(self):
        # Act
        varspec = parse_varspec("var:30")

        # Assert
        assert varspec == VarSpec("var", prefix=30)
        assert varspec.label == "var:30"

    def test_explode_modifier(self):
        # Act
        varspec = parse_varspec("list*")

        # Assert
        assert varspec == VarSpec("list", explode=True)
        assert varspec.label == "list"

    def test_dotted_and_pct_encoded_names(self):
        assert parse_varspec("a.b").name == "a.b"
        assert parse_varspec("%C3%A9t%C3%A9").name == "%C3%A9t%C3%A9"

    @pytest.mark.parametrize(
        "text",
        ["", "var:", "var:0", "var:10000", "var:abc", "var:3*", "bad-name", "a b", "a..b"],
    )
    def test_invalid_varspecs_raise(self, text):
        with pytest.raises(InvalidVarSpecError):
            parse_varspec(text)


class TestParseExpression:
    def test_simple_expression_has_no_operator_character(self):
        # Act
        op, varspecs = parse_expression("x,y")

        # Assert
        assert op is SIMPLE
        assert varspecs == [VarSpec("x"), VarSpec("y")]

    def test_operator_character_is_stripped(self):
        # Act
        op, varspecs = parse_expression("?q,page:2,tags*")

        # Assert
        assert op is lookup("?")
        assert varspecs == [
            VarSpec("q"),
            VarSpec("page", prefix=2),
            VarSpec("tags", explode=True),
        ]

    def test_operator_without_variables_raises(self):
        with pytest.raises(InvalidVarSpecError):
            parse_expression("+")

    def test_empty_variable_in_list_raises(self):
        with pytest.raises(InvalidVarSpecError):
            parse_expression("?x,,y")

    def test_unknown_operator_character_is_an_invalid_name(self):
        with pytest.raises(TemplateParseError):
            parse_expression("=x")


class TestSimpleExpansion:
    @pytest.mark.parametrize(
        "template,expected",
        [
            ("{var}", "value"),
            ("{hello}", "Hello%20World%21"),
            ("{half}", "50%25"),
            ("O{empty}X", "OX"),
            ("O{undef}X", "OX"),
            ("{x,y}", "1024,768"),
            ("{x,hello,y}", "1024,Hello%20World%21,768"),
            ("?{x,empty}", "?1024,"),
            ("?{x,undef}", "?1024"),
            ("?{undef,y}", "?768"),
            ("{var:3}", "val"),
            ("{var:30}", "value"),
            ("{list}", "red,green,blue"),
            ("{list*}", "red,green,blue"),
            ("{keys}", "semi,%3B,dot,.,comma,%2C"),
            ("{keys*}", "semi=%3B,dot=.,comma=%2C"),
        ],
    )
    def test_rfc_examples(self, template, expected):
        assert expand(template, VARIABLES) == expected


class TestReservedExpansion:
    @pytest.mark.parametrize(
        "template,expected",
        [
            ("{+var}", "value"),
            ("{+hello}", "Hello%20World!"),
            ("{+half}", "50%25"),
            ("{base}index", "http%3A%2F%2Fexample.com%2Fhome%2Findex"),
            ("{+base}index", "http://example.com/home/index"),
            ("O{+empty}X", "OX"),
            ("O{+undef}X", "OX"),
            ("{+path}/here", "/foo/bar/here"),
            ("here?ref={+path}", "here?ref=/foo/bar"),
            ("up{+path}{var}/here", "up/foo/barvalue/here"),
            ("{+x,hello,y}", "1024,Hello%20World!,768"),
            ("{+path,x}/here", "/foo/bar,1024/here"),
            ("{+path:6}/here", "/foo/b/here"),
            ("{+list}", "red,green,blue"),
            ("{+list*}", "red,green,blue"),
            ("{+keys}", "semi,;,dot,.,comma,,"),
            ("{+keys*}", "semi=;,dot=.,comma=,"),
        ],
    )
    def test_rfc_examples(self, template, expected):
        assert expand(template, VARIABLES) == expected

    def test_pct_encoded_triplets_pass_through(self):
        assert expand("{+p}", {"p": "a%20b"}) == "a%20b"
        assert expand("{p}", {"p": "a%20b"}) == "a%2520b"


class TestFragmentExpansion:
    @pytest.mark.parametrize(
        "template,expected",
        [
            ("{#var}", "#value"),
            ("{#hello}", "#Hello%20World!"),
            ("{#half}", "#50%25"),
            ("foo{#empty}", "foo#"),
            ("foo{#undef}", "foo"),
            ("{#x,hello,y}", "#1024,Hello%20World!,768"),
            ("{#path,x}/here", "#/foo/bar,1024/here"),
            ("{#path:6}/here", "#/foo/b/here"),
            ("{#list}", "#red,green,blue"),
            ("{#list*}", "#red,green,blue"),
            ("{#keys}", "#semi,;,dot,.,comma,,"),
            ("{#keys*}", "#semi=;,dot=.,comma=,"),
        ],
    )
    def test_rfc_examples(self, template, expected):
        assert expand(template, VARIABLES) == expected


class TestLabelExpansion:
    @pytest.mark.parametrize(
        "template,expected",
        [
            ("{.who}", ".fred"),
            ("{.who,who}", ".fred.fred"),
            ("{.half,who}", ".50%25.fred"),
            ("www{.dom*}", "www.example.com"),
            ("X{.var}", "X.value"),
            ("X{.empty}", "X."),
            ("X{.undef}", "X"),
            ("X{.var:3}", "X.val"),
            ("X{.list}", "X.red,green,blue"),
            ("X{.list*}", "X.red.green.blue"),
            ("X{.keys}", "X.semi,%3B,dot,.,comma,%2C"),
            ("X{.keys*}", "X.semi=%3B.dot=..comma=%2C"),
            ("X{.empty_list}", "X"),
            ("X{.empty_list*}", "X"),
        ],
    )
    def test_rfc_examples(self, template, expected):
        assert expand(template, VARIABLES) == expected


class TestPathSegmentExpansion:
    @pytest.mark.parametrize(
        "template,expected",
        [
            ("{/who}", "/fred"),
            ("{/who,who}", "/fred/fred"),
            ("{/half,who}", "/50%25/fred"),
            ("{/who,dub}", "/fred/me%2Ftoo"),
            ("{/var}", "/value"),
            ("{/var,empty}", "/value/"),
            ("{/var,undef}", "/value"),
            ("{/var,x}/here", "/value/1024/here"),
            ("{/var:1,var}", "/v/value"),
            ("{/list}", "/red,green,blue"),
            ("{/list*}", "/red/green/blue"),
            ("{/list*,path:4}", "/red/green/blue/%2Ffoo"),
            ("{/keys}", "/semi,%3B,dot,.,comma,%2C"),
            ("{/keys*}", "/semi=%3B/dot=./comma=%2C"),
            ("{/empty_list}", ""),
        ],
    )
    def test_rfc_examples(self, template, expected):
        assert expand(template, VARIABLES) == expected


class TestPathParameterExpansion:
    @pytest.mark.parametrize(
        "template,expected",
        [
            ("{;who}", ";who=fred"),
            ("{;half}", ";half=50%25"),
            ("{;empty}", ";empty"),
            ("{;v,empty,who}", ";v=6;empty;who=fred"),
            ("{;v,bar,who}", ";v=6;who=fred"),
            ("{;x,y}", ";x=1024;y=768"),
            ("{;x,y,empty}", ";x=1024;y=768;empty"),
            ("{;x,y,undef}", ";x=1024;y=768"),
            ("{;hello:5}", ";hello=Hello"),
            ("{;list}", ";list=red,green,blue"),
            ("{;list*}", ";list=red;list=green;list=blue"),
            ("{;keys}", ";keys=semi,%3B,dot,.,comma,%2C"),
            ("{;keys*}", ";semi=%3B;dot=.;comma=%2C"),
        ],
    )
    def test_rfc_examples(self, template, expected):
        assert expand(template, VARIABLES) == expected


class TestQueryExpansion:
    @pytest.mark.parametrize(
        "template,expected",
        [
            ("{?who}", "?who=fred"),
            ("{?half}", "?half=50%25"),
            ("{?x,y}", "?x=1024&y=768"),
            ("{?x,y,empty}", "?x=1024&y=768&empty="),
            ("{?x,y,undef}", "?x=1024&y=768"),
            ("{?var:3}", "?var=val"),
            ("{?list}", "?list=red,green,blue"),
            ("{?list*}", "?list=red&list=green&list=blue"),
            ("{?keys}", "?keys=semi,%3B,dot,.,comma,%2C"),
            ("{?keys*}", "?semi=%3B&dot=.&comma=%2C"),
            ("/search{?empty_list}", "/search"),
            ("/search{?empty_keys}", "/search"),
            ("/search{?empty_keys*}", "/search"),
            ("/search{?undef}", "/search"),
        ],
    )
    def test_rfc_examples(self, template, expected):
        assert expand(template, VARIABLES) == expected


class TestQueryContinuationExpansion:
    @pytest.mark.parametrize(
        "template,expected",
        [
            ("{&who}", "&who=fred"),
            ("{&half}", "&half=50%25"),
            ("?fixed=yes{&x}", "?fixed=yes&x=1024"),
            ("{&x,y,empty}", "&x=1024&y=768&empty="),
            ("{&var:3}", "&var=val"),
            ("{&list}", "&list=red,green,blue"),
            ("{&list*}", "&list=red&list=green&list=blue"),
            ("{&keys}", "&keys=semi,%3B,dot,.,comma,%2C"),
            ("{&keys*}", "&semi=%3B&dot=.&comma=%2C"),
        ],
    )
    def test_rfc_examples(self, template, expected):
        assert expand(template, VARIABLES) == expected


class TestExpandExpression:
    def test_prefix_is_attached_once_per_expression(self):
        assert expand_expression("?a,b", {"a": "1", "b": "2"}) == "?a=1&b=2"

    def test_all_missing_variables_elide_the_prefix(self):
        assert expand_expression("?a,b", {}) == ""

    def test_prefix_modifier_counts_characters_not_bytes(self):
        assert expand_expression("word:2", {"word": "éèa"}) == "%C3%A9%C3%A8"

    def test_prefix_modifier_is_ignored_for_lists(self):
        assert expand_expression("list:2", {"list": ["abc", "def"]}) == "abc,def"

    def test_numbers_are_expanded_as_text(self):
        assert expand_expression("/page,size", {"page": 3, "size": 2.5}) == "/3/2.5"

    def test_malformed_template_raises(self):
        with pytest.raises(TemplateParseError):
            expand("/users/{id", {"id": "1"})
