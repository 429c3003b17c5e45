from screenwork.core.observable import EventHook, ObservableObject


def test_event_hook_deduplicates_handlers():
    hook = EventHook("changed")
    seen = []

    def handler(value):
        seen.append(value)

    hook.connect(handler)
    hook.connect(handler)
    hook.emit(1)

    assert seen == [1]
    assert len(hook) == 1


def test_handler_may_disconnect_while_emitting():
    hook = EventHook()
    seen = []

    def once(value):
        seen.append(value)
        hook.disconnect(once)

    hook.connect(once)
    hook.emit("a")
    hook.emit("b")

    assert seen == ["a"]
    assert not hook.has_handlers()


def test_set_property_reports_public_name():
    class Model(ObservableObject):
        def __init__(self):
            super().__init__()
            self._title = ""

    model = Model()
    changed = []
    model.property_changed.connect(lambda sender, name: changed.append((sender, name)))

    assert model.set_property("_title", "Hello")
    assert not model.set_property("_title", "Hello")
    assert model.set_property("_title", "Bye", "caption")

    assert changed == [(model, "title"), (model, "caption")]
