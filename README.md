# starfly

A Galaga-style arcade shooter. Waves of enemy flies (B2s, tikis and
northrops) pulse in formation and fire back while you steer a ship along the
bottom of the board and shoot them down. Each enemy destroyed is worth 100
points. You start with four lives; when the last one is lost the game resets
itself three seconds later. When a wave is cleared, the enemy bullets still in
flight vanish and the next formation appears.

The ship can also be driven by a remote controller, such as a
pressure-sensitive touchpad, that connects over WebSocket.

## Installing

```
pip install .
```

## Playing

```
starfly
```

Options:

- `--no-server`: do not listen for remote input
- `-v`, `--verbose`: log game events

Keys in the game window:

- Left / Right arrow: move the ship
- Up arrow: shoot (at most one shot every 200 ms)
- Tab: switch between the game and the settings page

On the settings page:

- `-` / `+` (or `=`): lower or raise the touchpad pressure threshold by 50
- `1`: enemy flies can shoot
- `2`: player auto moves
- `3`: player auto shoots
- `4`: player is invincible

The game is paused while the settings page is shown. Sprites are drawn as
coloured rectangles, and explosions as ellipses. The lives left are shown as
small markers in the top-left corner of the board.

## Remote control over WebSocket

Unless `--no-server` is given, the game opens a WebSocket server on port 3030
of the machine's local IP address. A server that cannot start is logged, and
the game goes on without it. Each client is greeted with
`Connected to game server`. After that it sends JSON text messages such as

```
{"action": "right", "value": 720}
```

Here `action` is `right`, `left` or `shoot` and `value` is an integer pressure
peak. The server replies `OK`, `Unknown action` or `Parse error`. Binary
messages are ignored.

On each tick the game reads every queued event and carries out the first
action whose value reaches the "Touchpad Pressure" threshold, which is 500 by
default. Any further events in that batch are dropped. A move steers the ship
for 0.1 s.

## Using it as a library

The game logic runs without a window:

- `starfly.game.Galaga` holds one board and advances it with `tick(now)` and
  `handle_keyboard(event, now)`. `now` is a time in seconds.
- `starfly.player.KeyboardEvent(Key.ARROW_LEFT, pressed=True)` describes a key
  press or release.
- `starfly.settings.GameSettings` holds the settings. It can be saved and
  restored with `to_dict()` and `GameSettings.from_dict()`.
- `starfly.pages.SettingsPage` provides the settings rows and the operations
  that change them.
- `starfly.server.GameServer` and `ServerEventHandler` run the WebSocket
  server and turn its events into a `GameAction`. `GameServer` can be used as
  a context manager.
- `starfly.app.create_game(start_server)` builds a game, with or without the
  server. `starfly.app.run(game)` shows it in a window and returns the final
  score.

## What it does not do

- The settings "Enemy Flies Can Shoot", "Player Auto Moves" and "Player Auto
  Shoots" can be switched and are stored, but the game loop does not act on
  them. Enemies always shoot, and the player never moves or shoots by itself.
  Only the invincibility switch and the pressure threshold change play.
- The pressure threshold only changes while it is below 1000. Once it reaches
  1000 it can no longer be raised or lowered.
- Nothing is written to disk. Settings and scores last only while the game
  runs.
- No artwork is loaded. Every sprite is drawn as a plain shape.

## Running the tests

```
pip install .[test]
pytest
```