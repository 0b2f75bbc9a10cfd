from ssi_core.subtitles import OperationRecord, SubtitleDocument, apply_section_script


def test_apply_reports_success(document, capture_log):
    lines, _ = capture_log
    result = apply_section_script(document, [0, 2], "modify('fs', multiply(2))")
    assert result.success
    assert result.operation == "section_script"
    assert result.selection == [0, 2]
    assert result.error is None
    assert document.get_line(0).text == "{\\fs40}Never gonna {\\fs80}give {\\alpha&H55&\\fs80}you up"
    assert document.get_line(2).text == "{\\an7\\c&H00FF00&\\fs40}Top left"
    assert document.operations[-1].operation == "section_script"
    assert document.undo_points == ["Section Interpreter"]
    assert any("[Interpreter] Processed 2 line(s)" in line for line in lines)

def test_sign_style_defaults_and_pos(document, capture_log):
    lines, _ = capture_log
    apply_section_script(document, [1], "log(state['fs'], state['c'], state['b'], pos.x, pos.y)")
    assert any(line.endswith("] 48.0 &H0000FF& 1 100 200") for line in lines)

def test_duplicates_are_counted(document):
    result = apply_section_script(document, [1], "if i % 2 == 1:\n    duplicate()")
    assert result.success
    assert result.events_added == 1
    assert result.summary == "Processed 1 line(s), added 1"
    assert len(document) == 4

def test_cap_comes_from_config(sample_subs):
    document = SubtitleDocument(sample_subs, {"selection_cap": 5})
    result = apply_section_script(document, [0], "duplicate()")
    assert result.events_added == 5

def test_fault_becomes_failed_result(document, capture_log):
    lines, _ = capture_log
    result = apply_section_script(document, [0, 1], "if li == 1:\n    1 / 0")
    assert not result.success
    assert result.summary == "Script failed"
    assert "ZeroDivisionError" in result.error
    assert result.details == {'kind': 'runtime', 'script_line': 2, 'line_index': 1, 'section': 1}
    assert any("Traceback" in line for line in lines)
    assert document.operations == []

def test_failing_modify_line_becomes_failed_result(document, capture_log):
    lines, _ = capture_log
    result = apply_section_script(document, [0], "modify_line('layer', add(1, 2))")
    assert not result.success
    assert result.summary == "Script failed"
    assert result.details['kind'] == 'runtime'
    assert (result.details['line_index'], result.details['section']) == (0, 1)
    assert "TagArityMismatch" in result.error
    assert any("[Interpreter] ERROR: TagArityMismatch" in line for line in lines)

    result = apply_section_script(document, [0], "modify_line('layer', replace('abc'))")
    assert not result.success
    assert "ValueError" in result.error
    assert document.get_line(0).layer == 0
    assert document.operations == []

def test_cancel_from_progress_callback(sample_subs):
    document = SubtitleDocument(sample_subs, {})
    document.progress_callback = lambda fraction: document.cancel_operation()
    result = apply_section_script(document, [0, 1], "modify('fs', add(1))")
    assert not result.success
    assert result.summary == "Cancelled"
    assert result.error is None
    assert document.get_line(0).text.startswith("{\\fs21}")
    assert document.get_line(1).text == "{\\pos(100,200)}Sign text"

def test_empty_script_is_a_no_op(document):
    result = apply_section_script(document, [0], "   ")
    assert result.success
    assert result.summary == "No script provided"

def test_record_round_trips_through_dict():
    record = OperationRecord(operation="section_script", parameters={"cap": 10}, events_affected=3, events_added=1)
    restored = OperationRecord.from_dict(record.to_dict())
    assert restored == record
