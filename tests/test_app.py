from app import RequestSequence


def test_single_request_lifecycle():
    seq = RequestSequence()
    first = seq.start()
    assert seq.busy is True
    assert seq.finish(first) is True
    assert seq.busy is False


def test_superseded_by_empty_submission_is_not_busy():
    seq = RequestSequence()
    slow = seq.start()
    empty = seq.start()
    # the empty submission is rejected straight away
    assert seq.finish(empty) is True
    assert seq.busy is False
    # the earlier reply arrives late and is dropped
    assert seq.finish(slow) is False
    assert seq.busy is False


def test_late_reply_does_not_clear_newer_request():
    seq = RequestSequence()
    old = seq.start()
    new = seq.start()
    assert seq.finish(old) is False
    assert seq.busy is True
    assert seq.finish(new) is True
    assert seq.busy is False
