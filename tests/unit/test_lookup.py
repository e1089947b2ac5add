from pathlib import Path

import pytest
from fakes import FakeHttp, FakeSearch, canonical_link, version_page

from matlab_when.errors import InputShapeError
from matlab_when.installation import MatlabInstallation
from matlab_when.lookup import WhenClient, flatten_names, when
from matlab_when.releases import LATEST_RELEASE_PAGE
from matlab_when.report import format_outcomes

MATLAB_REF = "https://mathworks.com/help/matlab/ref/{}.html"


def _client(
    http: FakeHttp,
    search: FakeSearch,
    installation: MatlabInstallation,
) -> WhenClient:
    return WhenClient(
        http=http,  # type: ignore[arg-type]
        search=search,
        installation=installation,
    )


def test_flatten_names_keeps_order_across_nesting() -> None:
    assert flatten_names([["plot", ("urlread",)], "webread", [["isgray"]]]) == [
        "plot",
        "urlread",
        "webread",
        "isgray",
    ]


def test_flatten_names_single_string() -> None:
    assert flatten_names("rand") == ["rand"]


@pytest.mark.parametrize("bad", [42, None, ["rand", 3], b"rand"])
def test_flatten_names_rejects_non_text(bad: object) -> None:
    with pytest.raises(InputShapeError):
        flatten_names(bad)


def test_input_shape_error_aborts_before_any_lookup() -> None:
    http = FakeHttp()
    client = _client(http, FakeSearch(), MatlabInstallation(None, "R2021a"))
    with pytest.raises(InputShapeError):
        when(["rand", 7], client=client)
    assert http.requested == []


def test_batch_rand_and_bogus() -> None:
    http = FakeHttp(
        {MATLAB_REF.format("rand"): version_page("Introduced before R2006a")}
    )
    client = _client(http, FakeSearch([]), MatlabInstallation(None, "R2021a"))

    text = format_outcomes(when(["rand", "bogus_nonexistent_fn"], client=client))

    assert text.splitlines() == [
        "## rand -- Introduced before R2006a",
        "## bogus_nonexistent_fn -- Does not exist in this installation; "
        "no online documentation found",
        " " * len("## bogus_nonexistent_fn -- ")
        + "If this is part of MATLAB, it may have been removed before R2021a",
    ]


def test_names_are_lowercased() -> None:
    http = FakeHttp(
        {MATLAB_REF.format("webread"): version_page("Introduced in R2014b")}
    )
    client = _client(http, FakeSearch(), MatlabInstallation(None, "R2021a"))
    outcomes = when("WebRead", client=client)
    assert outcomes[0].name == "webread"


def test_exists_locally_scenario_with_latest_release_failure(tmp_path: Path) -> None:
    mfile = tmp_path / "toolbox" / "images" / "images" / "isgray.m"
    mfile.parent.mkdir(parents=True)
    mfile.write_text("function y = isgray(x)\n", encoding="utf-8")
    (tmp_path / "VersionInfo.xml").write_text(
        "<MathWorks_version_info><release>R2019b</release>"
        "</MathWorks_version_info>",
        encoding="utf-8",
    )
    client = _client(FakeHttp(), FakeSearch([]), MatlabInstallation(tmp_path))

    lines = format_outcomes(when("isgray", client=client)).splitlines()

    assert lines == [
        "## isgray -- Exists, but no online documentation found",
        "             Function may have been removed between R2019b and "
        "the latest version",
    ]


def test_exists_locally_scenario_with_latest_release(tmp_path: Path) -> None:
    mfile = tmp_path / "toolbox" / "images" / "images" / "isgray.m"
    mfile.parent.mkdir(parents=True)
    mfile.write_text("function y = isgray(x)\n", encoding="utf-8")
    http = FakeHttp(
        {LATEST_RELEASE_PAGE: '<img src="/help/releases/R2021a/includes/x.png">'}
    )
    client = _client(http, FakeSearch([]), MatlabInstallation(tmp_path, "R2019b"))

    lines = format_outcomes(when("isgray", client=client)).splitlines()

    assert lines[1].endswith("removed between R2019b and R2021a")


def test_connection_error_then_batch_continues() -> None:
    http = FakeHttp(
        {MATLAB_REF.format("plot"): version_page("Introduced before R2006a")}
    )
    client = _client(http, FakeSearch(fail=True), MatlabInstallation(None, "R2021a"))

    text = format_outcomes(when(["nosuchthing", "plot"], client=client))

    assert text.splitlines() == [
        "Connection error.  Direct lookups and web searches all failed.",
        "## plot -- Introduced before R2006a",
    ]


def test_rename_reported_under_version_line() -> None:
    page = version_page(
        "Introduced before R2006a",
        head=canonical_link("https://www.mathworks.com/help/matlab/ref/clim.html"),
        extra="<h3>R2022a: Renamed from <code>caxis</code></h3>",
    )
    http = FakeHttp({MATLAB_REF.format("caxis"): page})
    client = _client(http, FakeSearch(), MatlabInstallation(None, "R2023a"))

    lines = format_outcomes(when("caxis", client=client)).splitlines()

    assert lines == [
        "## clim -- Introduced before R2006a",
        "           caxis was renamed to clim in R2022a",
    ]


def test_without_installation_release_falls_back_to_latest() -> None:
    http = FakeHttp(
        {LATEST_RELEASE_PAGE: '<script src="/help/releases/R2024b/includes/a.js">'}
    )
    client = _client(http, FakeSearch([]), MatlabInstallation(None))

    lines = format_outcomes(when("wavread", client=client)).splitlines()

    assert lines[1].endswith("may have been removed before R2024b")


def test_helpers_off_the_path_are_not_reported_as_local(tmp_path: Path) -> None:
    helper = tmp_path / "toolbox" / "images" / "images" / "private" / "parseinputs.m"
    helper.parent.mkdir(parents=True)
    helper.write_text("function parseinputs\n", encoding="utf-8")
    nsfunc = tmp_path / "toolbox" / "matlab" / "+pkg" / "nsonly.m"
    nsfunc.parent.mkdir(parents=True)
    nsfunc.write_text("function nsonly\n", encoding="utf-8")
    client = _client(FakeHttp(), FakeSearch([]), MatlabInstallation(tmp_path, "R2021a"))

    lines = format_outcomes(when(["parseinputs", "nsonly"], client=client)).splitlines()

    assert lines[0].startswith("## parseinputs -- Does not exist in this installation")
    assert lines[2].startswith("## nsonly -- Does not exist in this installation")
