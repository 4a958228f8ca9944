from services.about import SectionKind, parse_mission, parse_objectives, parse_rules, render_section, render_sections


def test_section_kind_falls_back_to_text():
    assert SectionKind.for_section("mission") is SectionKind.MISSION
    assert SectionKind.for_section(" Objectives ") is SectionKind.OBJECTIVES
    assert SectionKind.for_section("vision") is SectionKind.TEXT
    assert SectionKind.for_section("") is SectionKind.TEXT


def test_mission_splits_on_bullets():
    text = "• Teach programming • Build projects\n• Grow together "

    assert parse_mission(text) == ["Teach programming", "Build projects", "Grow together"]


def test_objectives_split_on_blank_lines():
    cards = parse_objectives("Be bold.\n\nLead with integrity.")

    assert [c.title for c in cards] == ["Be bold.", "Lead with integrity."]
    assert [c.body for c in cards] == ["", ""]


def test_objective_title_and_body_split_on_first_colon_space():
    cards = parse_objectives("Skill Building: Learn by doing: one project at a time\n\nCommunity: Help each other")

    assert cards[0].title == "Skill Building"
    assert cards[0].body == "Learn by doing: one project at a time"
    assert (cards[1].title, cards[1].body) == ("Community", "Help each other")


def test_objectives_accept_crlf_from_textareas():
    cards = parse_objectives("One: a\r\n\r\nTwo: b")

    assert [(c.title, c.body) for c in cards] == [("One", "a"), ("Two", "b")]


def test_rules_flag_disciplinary_groups():
    text = (
        "General Conduct\nBe respectful\nBe on time\n\n"
        "Disciplinary Action\nFirst violation: warning\nSecond violation: suspension"
    )

    general, disciplinary = parse_rules(text)

    assert general.title == "General Conduct"
    assert general.flagged is False
    assert disciplinary.title == "Disciplinary Action"
    assert disciplinary.flagged is True
    assert disciplinary.items == ["First violation: warning", "Second violation: suspension"]


def test_rule_group_list_or_paragraph():
    single, multi, bare = parse_rules("Attendance\nCome to sessions\n\nLab\nClean up\nLog out\n\nTitle only")

    assert single.as_list is False and single.items == ["Come to sessions"]
    assert multi.as_list is True
    assert bare.items == [] and bare.as_list is False


def test_unknown_section_renders_raw_text():
    rendered = render_section("vision", "Our Vision", "Line one\nLine two")

    assert rendered.kind is SectionKind.TEXT
    assert rendered.text == "Line one\nLine two"


def test_empty_structured_section_falls_back_to_text():
    rendered = render_section("mission", "Mission", "   ")

    assert rendered.kind is SectionKind.TEXT


def test_render_sections_keeps_row_order_and_ids():
    rows = [
        {"id": 2, "section": "mission", "title": "Mission", "description": "• a • b"},
        {"id": 1, "section": "objectives", "title": "Objectives", "description": "X: y"},
    ]

    rendered = render_sections(rows)

    assert [r.id for r in rendered] == [2, 1]
    assert rendered[0].items == ["a", "b"]
    assert rendered[1].cards[0].title == "X"
