# One Clicker

A small incremental game about a single coin. You click the field to make
coins worth 1 and sweep the mouse over them to collect them. Then you spend
what you have collected on machines that make, move and combine coins for you.

## Installing

```
pip install .
```

The game draws with pygame, which is installed along with it.

## Playing

```
oneclicker
```

Options:

- `--width`, `--height`: the starting window size in pixels (default 1280×720).
- `--seed`: a seed for the random numbers, so that coin throws repeat.

The title screen waits for a click. After that:

- **Left click** on the field spawns a coin worth 1. No coin is spawned while a
  tool is selected.
- **Hover** near coins to pick them up. A coin within 192 world units of the
  cursor flies to it and is added to your balance.
- **Right drag** moves the camera. The **mouse wheel** zooms. The zoom starts at
  4 and stays between 1 and 20.
- The toolbar at the bottom lists the machines. A machine shows `???` and stays
  locked until your balance reaches its cost. Click a button to select that
  machine. A ghost of it then follows the cursor tile by tile. Left click to
  build it, or left drag to build a line of them. Click the button again, or
  right click, to deselect it. A machine is built only on a tile without a
  machine, and only if you can pay for it.
- **Delete** is the last button. With it selected, a left click removes the
  machine under the cursor, and a left drag removes a line of them.

### Machines

| Machine        | Cost | Period | What it does                                                  |
|----------------|-----:|-------:|---------------------------------------------------------------|
| Miner          |   20 |  1.0 s | Throws a new coin worth 1 downward                            |
| Collector      |  200 |  0.1 s | Takes a coin from the tile above into your balance            |
| Up Conveyor    |   10 |  0.2 s | Takes a coin from its own tile or the one below, throws it up |
| Down Conveyor  |   10 |  0.2 s | Takes a coin from its own tile or the one above, throws it down |
| Left Conveyor  |   10 |  0.2 s | Takes a coin from its own tile or the one to the right, throws it left |
| Right Conveyor |   10 |  0.2 s | Takes a coin from its own tile or the one to the left, throws it right |
| Adder          |  500 |  1.0 s | Takes the coins to its left and right, throws down their sum  |
| Multiplier     | 1000 |  1.0 s | Takes the coins to its left and right, throws down their product |

A machine acts only on coins that have finished appearing and are not already
being picked up. Small spots next to a placed machine mark the tiles it reads
from or throws to. A spot is hidden while a machine stands on its tile.

## Using it as a library

The game logic does not need a window. `oneclicker.game.Game` holds the whole
state. Each call to `Game.step(delta, frame_input)` advances it by one frame and
returns the current `GameState` (`TITLE` or `GAMEPLAY`). The input for that frame
is a `FrameInput`, which holds:

- the interaction
- the cursor position, with its origin at the bottom left
- the window size
- the mouse buttons just pressed and just released
- the scroll events
- the indices of the toolbar buttons that were clicked

After a step you can read back:

- `game.world` (a `GameWorld`): its coins, machines, spots, balance and camera
- `game.hud.toolbar`: the toolbar buttons
- `game.hud.ghost`: the ghost of the selected tool

`Game.run()` opens a pygame window and drives the same loop from real input.

Other modules you can use directly:

- `oneclicker.machines`: the machine table and the placing, deleting and acting
  rules
- `oneclicker.input`: turns mouse button state into click, hover and drag events
- `oneclicker.tiles`: tile coordinates and the index of what stands on each tile

## What it does not do

- It has no images, fonts or sounds of its own. The window draws coins, machines
  and the toolbar as plain shapes, labelled in pygame's default font.
- It does not save progress. Closing the window ends the game.

## Running the tests

```
pip install ".[test]"
pytest
```