from chip8.core.framebuffer import Framebuffer
from chip8.drivers.display import TextRenderer


def _frame(*sprite):
    fb = Framebuffer()
    fb.draw_sprite(0, 0, sprite)
    return fb.snapshot()


def test_render_before_first_frame_is_empty():
    assert TextRenderer().render() == ""


def test_draw_keeps_latest_frame():
    renderer = TextRenderer()
    frame = _frame(0x80)
    renderer.draw(frame)
    assert renderer.frame == frame
    assert renderer.render().splitlines()[0].startswith("#.")


def test_sink_only_called_on_change():
    output = []
    renderer = TextRenderer(sink=output.append)
    frame = _frame(0x80)
    renderer.draw(frame)
    renderer.draw(frame)
    renderer.draw(_frame(0xC0))
    assert renderer.frames_drawn == 3
    assert len(output) == 2


def test_custom_glyphs():
    renderer = TextRenderer(on="@", off=" ")
    renderer.draw(_frame(0x80))
    first_row = renderer.render().splitlines()[0]
    assert first_row == "@" + " " * 63
