"""
Tests for the option aggregates (mathpix_api/options)
"""

import pytest

from mathpix_api.base import BoundedFraction, TriState
from mathpix_api.errors import (
    BadOptionError,
    ConflictError,
    OptionError,
    UnknownOptionError,
)
from mathpix_api.formats import FormatSet, LatexFormat, PdfConversionFormat, TextFormat
from mathpix_api.options import (
    Callback,
    DataOptions,
    FormatOptions,
    LaTeXOptions,
    PdfOptions,
    Region,
    StrokesOptions,
    TextOptions,
    parse_flag,
    parse_fraction,
    parse_unsigned,
)


class TestParsers:
    @pytest.mark.parametrize("raw,expected", [
        (True, True), ("yes", True), ("ON", True), ("1", True),
        (False, False), ("no", False), ("off", False), ("0", False),
    ])
    def test_parse_flag(self, raw, expected):
        assert parse_flag("rm_spaces", raw) is expected

    def test_parse_flag_rejects(self):
        with pytest.raises(BadOptionError) as exc_info:
            parse_flag("rm_spaces", "maybe")
        assert exc_info.value.option == "rm_spaces"

    def test_parse_fraction_out_of_bounds(self):
        with pytest.raises(BadOptionError) as exc_info:
            parse_fraction("confidence_threshold", "1.5")
        assert exc_info.value.cause is not None
        assert "confidence_threshold" in str(exc_info.value)

    def test_parse_fraction_not_numeric(self):
        with pytest.raises(BadOptionError):
            parse_fraction("confidence_threshold", "high")

    def test_parse_unsigned(self):
        assert parse_unsigned("beam_size", "3") == 3
        with pytest.raises(BadOptionError):
            parse_unsigned("beam_size", -1)
        with pytest.raises(BadOptionError):
            parse_unsigned("beam_size", True)


class TestDataOptions:
    def test_tokens(self):
        options = DataOptions.from_tokens(["include_latex", "!include_svg", "noinclude_tsv"])
        assert options.to_wire() == {
            "include_svg": False,
            "include_latex": True,
            "include_tsv": False,
        }

    def test_unset_fields_omitted(self):
        assert DataOptions().to_wire() == {}
        assert DataOptions().is_unset

    def test_conflict(self):
        with pytest.raises(ConflictError):
            DataOptions.from_tokens(["include_svg", "!include_svg"])

    def test_unknown(self):
        with pytest.raises(UnknownOptionError):
            DataOptions.from_tokens(["include_everything"])

    def test_later_update_wins(self):
        options = DataOptions.from_tokens(["include_svg"]).update(["!include_svg"])
        assert options.include_svg is TriState.FALSE


class TestTextOptions:
    def test_empty(self):
        assert TextOptions().to_wire() == {}

    def test_setters_return_new_instance(self):
        base = TextOptions()
        updated = base.add_formats(["text"])
        assert base.formats is None
        assert updated.formats.to_wire() == ["text"]

    def test_empty_formats_stay_unset(self):
        assert "formats" not in TextOptions().add_formats([]).to_wire()

    def test_add_format_enum(self):
        options = TextOptions().add_format(TextFormat.HTML)
        assert options.to_wire()["formats"] == ["html"]

    def test_full_payload(self):
        options = (
            TextOptions()
            .add_formats(["text", "data"])
            .set_data_options(["include_asciimath"])
            .set_alphabets_allowed(["en", "ru"])
            .set_confidence_threshold("0.8")
            .set_include_line_data(True)
            .set_rm_spaces("false")
            .set_metadata({"improve_mathpix": False})
        )
        wire = options.to_wire()
        assert wire["formats"] == ["text", "data"]
        assert wire["data_options"] == {"include_asciimath": True}
        assert wire["alphabets_allowed"]["en"] is True
        assert wire["alphabets_allowed"]["hi"] is None
        assert wire["confidence_threshold"] == 0.8
        assert wire["include_line_data"] is True
        assert wire["rm_spaces"] is False
        assert wire["metadata"] == {"improve_mathpix": False}
        assert "include_word_data" not in wire

    def test_bad_format_leaves_options_unchanged(self):
        options = TextOptions().add_formats(["text"])
        with pytest.raises(UnknownOptionError):
            options.add_formats(["html", "latex_normal"])
        assert options.formats.to_wire() == ["text"]

    def test_bad_threshold(self):
        with pytest.raises(BadOptionError):
            TextOptions().set_confidence_rate_threshold(1.2)

    def test_disallow_alphabets(self):
        options = TextOptions().set_alphabets_allowed(["en"]).disallow_alphabets(["ru"])
        assert options.alphabets_allowed.ru is TriState.FALSE

    def test_metadata_is_frozen(self):
        source = {"key": "value"}
        options = TextOptions().set_metadata(source)
        source["key"] = "changed"
        assert options.metadata["key"] == "value"
        with pytest.raises(TypeError):
            options.metadata["key"] = "x"

    def test_metadata_requires_mapping(self):
        with pytest.raises(BadOptionError):
            TextOptions().set_metadata(["not", "a", "mapping"])

    @pytest.mark.parametrize("setter,value", [
        ("add_formats", ["text", "html"]),
        ("set_alphabets_allowed", ["en", "!ru"]),
        ("set_data_options", ["include_latex"]),
        ("set_confidence_threshold", 0.4),
        ("set_include_smiles", True),
    ])
    def test_setters_are_idempotent(self, setter, value):
        once = getattr(TextOptions(), setter)(value)
        twice = getattr(once, setter)(value)
        assert once == twice

    def test_all_options_are_errors_of_one_family(self):
        with pytest.raises(OptionError):
            TextOptions().set_alphabets_allowed(["en", "!en"])


class TestFormatOptions:
    def test_transforms_and_delims(self):
        options = (
            FormatOptions()
            .add_transforms(["rm_spaces", "rm_fonts"])
            .set_math_delims("$", "$")
        )
        assert options.to_wire() == {
            "transforms": ["rm_spaces", "rm_fonts"],
            "math_delims": ["$", "$"],
        }

    def test_delimiter_arity(self):
        with pytest.raises(BadOptionError):
            FormatOptions(math_delims=("$",))
        with pytest.raises(BadOptionError):
            FormatOptions(displaymath_delims=["$$", "$$", "$$"])

    def test_unknown_transform(self):
        with pytest.raises(UnknownOptionError):
            FormatOptions().add_transforms(["rm_everything"])


class TestRegionAndCallback:
    def test_region_parse(self):
        region = Region.parse("10,,40,50")
        assert region.to_wire() == {"top_left_x": 10, "width": 40, "height": 50}

    def test_region_wrong_arity(self):
        with pytest.raises(BadOptionError):
            Region.parse("10,20")

    def test_region_negative(self):
        with pytest.raises(BadOptionError):
            Region(width=-5)

    def test_callback(self):
        callback = Callback(post="https://example.com/hook", reply={"id": 1})
        assert callback.to_wire() == {"post": "https://example.com/hook", "reply": {"id": 1}}

    def test_callback_bad_url(self):
        with pytest.raises(BadOptionError):
            Callback(post="not a url")


class TestLaTeXOptions:
    def test_payload(self):
        options = (
            LaTeXOptions()
            .add_formats(["latex_styled", "asciimath"])
            .set_ocr(["math", "text"])
            .add_transforms(["rm_spaces"])
            .set_displaymath_delims("\\[", "\\]")
            .set_region("0,0,100,50")
            .set_skip_recrop("yes")
        )
        wire = options.to_wire()
        assert wire["formats"] == ["latex_styled", "asciimath"]
        assert wire["ocr"] == ["math", "text"]
        assert wire["format_options"] == {
            "transforms": ["rm_spaces"],
            "displaymath_delims": ["\\[", "\\]"],
        }
        assert wire["region"]["width"] == 100
        assert wire["skip_recrop"] is True

    def test_text_only_format_rejected(self):
        with pytest.raises(UnknownOptionError):
            LaTeXOptions().add_formats(["html"])

    def test_beam_size_bounds(self):
        assert LaTeXOptions().set_beam_size(3).beam_size == 3
        with pytest.raises(BadOptionError):
            LaTeXOptions().set_beam_size(6)
        with pytest.raises(BadOptionError):
            LaTeXOptions().set_beam_size(0)

    def test_n_best_not_above_beam_size(self):
        options = LaTeXOptions().set_beam_size(3)
        assert options.set_n_best(3).n_best == 3
        with pytest.raises(BadOptionError):
            options.set_n_best(4)

    def test_n_best_defaults_to_server_beam_size(self):
        assert LaTeXOptions().set_n_best(5).n_best == 5
        with pytest.raises(BadOptionError):
            LaTeXOptions().set_n_best(6)

    def test_empty_transforms_keep_format_options_unset(self):
        assert LaTeXOptions().add_transforms([]).format_options is None

    def test_threshold(self):
        options = LaTeXOptions().set_confidence_threshold(BoundedFraction(0.3))
        assert options.to_wire() == {"confidence_threshold": 0.3}


class TestPdfOptions:
    def test_conversion_formats_are_flags(self):
        options = PdfOptions().add_conversion_formats(["docx", "tex.zip"])
        assert options.to_wire() == {"conversion_formats": {"docx": True, "tex.zip": True}}

    def test_delimiters(self):
        options = PdfOptions().set_math_inline_delimiters("\\(", "\\)")
        assert options.to_wire() == {"math_inline_delimiters": ["\\(", "\\)"]}

    @pytest.mark.parametrize("ranges", ["2,4-6", "1-", "2 - -2"])
    def test_page_ranges(self, ranges):
        assert PdfOptions().set_page_ranges(ranges).page_ranges == ranges

    @pytest.mark.parametrize("ranges", ["", "a-b", "1,,2"])
    def test_bad_page_ranges(self, ranges):
        with pytest.raises(BadOptionError):
            PdfOptions().set_page_ranges(ranges)

    def test_alphabets(self):
        options = PdfOptions().set_alphabets_allowed(["!zh"])
        assert options.to_wire()["alphabets_allowed"]["zh"] is False

    def test_unknown_conversion_format(self):
        with pytest.raises(UnknownOptionError):
            PdfOptions().add_conversion_formats(["pptx"])


class TestStrokesOptions:
    def test_payload(self):
        options = (
            StrokesOptions()
            .add_formats(["text", "data"])
            .set_data_options(["include_latex"])
        )
        assert options.to_wire() == {
            "formats": ["text", "data"],
            "data_options": {"include_latex": True},
        }

    def test_latex_format_rejected(self):
        with pytest.raises(UnknownOptionError):
            StrokesOptions().add_formats(["latex_styled"])


class TestDirectConstruction:
    """Building an aggregate without setters runs the same checks"""

    def test_raw_fraction_is_checked(self):
        with pytest.raises(BadOptionError) as exc_info:
            TextOptions(confidence_threshold=1.5)
        assert exc_info.value.option == "confidence_threshold"

    def test_raw_fraction_is_coerced(self):
        options = TextOptions(confidence_rate_threshold="0.25")
        assert options.confidence_rate_threshold == BoundedFraction(0.25)
        assert options.to_wire() == {"confidence_rate_threshold": 0.25}

    def test_string_flag_is_coerced(self):
        assert TextOptions(rm_spaces="yes").to_wire() == {"rm_spaces": True}

    def test_bad_flag(self):
        with pytest.raises(BadOptionError):
            TextOptions(include_smiles="sometimes")

    def test_list_instead_of_format_set(self):
        with pytest.raises(BadOptionError) as exc_info:
            TextOptions(formats=["text"])
        assert exc_info.value.option == "formats"

    def test_wrong_vocabulary(self):
        with pytest.raises(BadOptionError):
            TextOptions(formats=FormatSet.from_strings(LatexFormat, ["wolfram"]))

    def test_wrong_nested_types(self):
        with pytest.raises(BadOptionError):
            TextOptions(alphabets_allowed=["en"])
        with pytest.raises(BadOptionError):
            TextOptions(data_options={"include_svg": True})
        with pytest.raises(BadOptionError):
            StrokesOptions(data_options=["include_latex"])
        with pytest.raises(BadOptionError):
            PdfOptions(alphabets_allowed={"en": True})

    def test_latex_string_beam_size(self):
        assert LaTeXOptions(beam_size="3").beam_size == 3
        with pytest.raises(BadOptionError):
            LaTeXOptions(beam_size="three")
        with pytest.raises(BadOptionError):
            LaTeXOptions(beam_size="3", n_best="4")

    def test_latex_nested_types(self):
        with pytest.raises(BadOptionError):
            LaTeXOptions(region="0,0,10,10")
        with pytest.raises(BadOptionError):
            LaTeXOptions(callback="https://example.com/hook")
        with pytest.raises(BadOptionError):
            LaTeXOptions(format_options={"math_delims": ["$", "$"]})
        with pytest.raises(BadOptionError):
            LaTeXOptions(ocr=["math"])

    def test_latex_flags_and_fractions(self):
        options = LaTeXOptions(skip_recrop="true", auto_rotate_confidence_threshold=0)
        assert options.to_wire() == {"skip_recrop": True, "auto_rotate_confidence_threshold": 0.0}
        with pytest.raises(BadOptionError):
            LaTeXOptions(confidence_threshold=-0.1)

    def test_pdf_flags(self):
        assert PdfOptions(rm_fonts="off").to_wire() == {"rm_fonts": False}
        with pytest.raises(BadOptionError):
            PdfOptions(conversion_formats=["docx"])

    def test_transforms_must_be_format_set(self):
        with pytest.raises(BadOptionError):
            FormatOptions(transforms=["rm_spaces"])


class TestEmptyNestedOptions:
    def test_empty_region_is_omitted(self):
        assert LaTeXOptions().set_region(",,,").to_wire() == {}

    def test_empty_data_options_are_omitted(self):
        assert TextOptions(data_options=DataOptions()).to_wire() == {}

    def test_empty_format_options_are_omitted(self):
        assert LaTeXOptions(format_options=FormatOptions()).to_wire() == {}

    def test_empty_format_set_is_omitted(self):
        options = PdfOptions(conversion_formats=FormatSet(PdfConversionFormat, option="conversion_formats"))
        assert options.to_wire() == {}
