# lambdaengine

Core building blocks for a small real-time engine, in plain Python with no
third-party dependencies.

## Modules

- `lambdaengine.log`: thread-aware logging. Messages go to every sink added
  with `add_sink` (a `Sink` has `put` and `flush`); `clear_sinks` removes
  them. `register_thread` names the calling thread, `unregister_thread`
  forgets a name; messages from unnamed threads show `???`. Logging functions
  `debug`, `info`, `warn`, `error` and `fatal` take a `str.format` pattern and
  arguments; `put_message` takes a finished message and a `Level`.
- `lambdaengine.streams`: `OStream` and `FileOStream` (text or binary file
  objects), `std_out()` and `std_err()`, `synchronise(*streams)` which returns
  `SynchronisedOStream`s that flush their siblings before each write, and
  `OStreamSink`, which writes log records within a level range as
  `[YYYY-mm-dd HH:MM:SS] thread [level] >> message`.
- `lambdaengine.errors`: `LambdaError`, `SystemFailure(error_code, message)`
  and `expect(predicate, message, *args)`, which logs a fatal message and
  raises `ExpectationError` when the predicate is false.
- `lambdaengine.vector`: `Vec2`, `Vec3` and `Vec4` with component-wise `+ - * /`
  (scalar `*` and `/` too; integer division truncates toward zero), in-place
  operators, unary `+`/`-`, equality, `dot`, `Vec3.cross`, `length` (a zero
  vector raises `ExpectationError`) and swizzles such as `xy()` and `yzw()`.
  Constructors accept no arguments (all zero), one number (repeated), or any
  mix of numbers and smaller vectors that adds up to the right size.
- `lambdaengine.arena`: `Arena(capacity)`, a bump allocator with
  `allocate_bytes`, `allocate`, `emplace`, `reset`, `move_from`, `capacity`,
  `used` and `remaining`. Objects whose type defines `close` are closed,
  newest first, on `reset`, at the end of an `Arena.scope()` / `ArenaScope`
  block, or when the arena is collected. `kb_to_b`, `mb_to_b` and `gb_to_b`
  convert sizes.
- `lambdaengine.handles`: `AutoRelease(handle, close, invalid=None)` owns a
  handle and closes it on `reset` or at the end of a `with` block; `Deferred`
  calls a function when its `with` block ends.
- `lambdaengine.thread_pool`: `ThreadPool(worker_count=None)` with workers
  named `tp_worker_<n>`, `add`, `drain`, `close` and context-manager use;
  `default_worker_count()` is the CPU count minus one, kept between 1 and 32.
  `NamedThread` runs `func(stop_event, *args)` and keeps any exception raised.
- `lambdaengine.awaitables`: `AwaitableManager(pool)` with `await
  manager.next_tick()` and `await manager.sleep(seconds_or_timedelta)`;
  `pump()` sends ready coroutines to the pool and re-raises one stored
  failure. `start_task` / `Task` run a coroutine until its first suspension;
  an exception escaping a task is logged, not raised.
- `lambdaengine.command_line`: `parse_options(options_type, arguments)` builds
  a dataclass (every field needs a default) and overrides fields from
  `--field value` pairs. `str`, `int` and `float` fields are converted;
  `bool` fields take `1` or `0`. A missing or unparsable value raises
  `LambdaError`.
- `lambdaengine.window`: `Window(WindowConfig(height, width, title,
  start_mode))` keeps a queue of events (`WindowQuitEvent`) added with
  `post_event`; `process_events` hands them to the handler set with
  `set_event_handler` until it returns `False`. `set_mode` switches
  `WindowMode`.
- `lambdaengine.renderer`: `CommandBuffer` packs commands into bytes and
  iterates them back as `(CommandType, command)` pairs; `CommandList.clear`
  records a `ClearCommand`; `Renderer(RendererConfig(api,
  command_buffer_size), window, arena, backend)` takes its command buffer
  from the arena, calls `submit(func)` with a `CommandList`, and passes the
  buffer to a `Backend` in `end_frame`.

## What it does not do

There is no command to run: this is a library only. `Window` opens nothing on
screen; events reach it only through `post_event`. No graphics backend is
built in: `make_backend` raises `ExpectationError` for every `Api`, so a
`Renderer` needs a `Backend` subclass passed in.

## Install

```
pip install .
pip install ".[test]"
```

## Examples

Logging to standard output and standard error:

```python
import sys
from lambdaengine import log
from lambdaengine.streams import FileOStream, OStreamSink, synchronise
from lambdaengine.vector import Vec3

out, err = synchronise(FileOStream(sys.stdout), FileOStream(sys.stderr))
log.add_sink(OStreamSink(out, log.Level.DEBUG, log.Level.INFO))
log.add_sink(OStreamSink(err, log.Level.WARN, log.Level.FATAL))
log.register_thread("main")

colour = Vec3(0.0) + Vec3(0.05, 0.2, 0.6)
log.info("clear colour is {}", colour)
```

A frame loop with a backend of your own:

```python
from lambdaengine.arena import Arena, mb_to_b
from lambdaengine.renderer import Api, Backend, Renderer, RendererConfig
from lambdaengine.vector import Vec3
from lambdaengine.window import Window, WindowConfig, WindowQuitEvent


class PrintBackend(Backend):
    def begin_frame(self):
        pass

    def end_frame(self, commands):
        for command_type, command in commands:
            print(command_type.name, command.rgba)
        commands.clear()


arena = Arena(mb_to_b(1))
window = Window(WindowConfig(height=720, width=1080, title="demo"))
renderer = Renderer(RendererConfig(Api.OPENGL, 1024), window, arena, PrintBackend())

running = True

def on_event(event):
    global running
    if isinstance(event, WindowQuitEvent):
        running = False
    return running

window.set_event_handler(on_event)
window.post_event(WindowQuitEvent())

renderer.begin_frame()
renderer.submit(lambda commands: commands.clear(Vec3(0.1, 0.2, 0.3), 1.0))
renderer.end_frame()
window.process_events()
```

Coroutines resumed on a thread pool:

```python
from lambdaengine.awaitables import AwaitableManager, start_task
from lambdaengine.thread_pool import ThreadPool


async def tick(manager, counter):
    while True:
        await manager.next_tick()
        counter.append(1)


counter = []
with ThreadPool(2) as pool:
    manager = AwaitableManager(pool)
    start_task(tick(manager, counter))
    for _ in range(3):
        manager.pump()
        pool.drain()
```

## Tests

```
pytest
```