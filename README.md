# groupbot

Building blocks for the features of a group chat bot. Each module holds the
state and rules of one feature. Your bot framework stays in charge of
receiving messages and sending replies. The package uses only the Python
standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

| Module | What it does |
| --- | --- |
| `groupbot.thesaurus` | `Thesaurus`: canned replies picked at random for an exact message text; `Thesaurus.from_json`, `keys`, `reply` |
| `groupbot.tiangou` | `DiaryDB`: diary lines in a SQLite file, with `add`, `count` and a random `pick` |
| `groupbot.runcode` | Running code snippets on an online compiler service: `run_code`, `lookup_language`, `template_for`, `parse_result`, and output trimming with `clear_newline_suffix` and `cut_too_long` |
| `groupbot.wtf` | The table of quiz generators: `new_wtf`, `list_text`, and `Wtf.url`, `Wtf.parse_response`, `Wtf.predict` |
| `groupbot.score` | `ScoreDB`: daily sign-in and a score capped at `SCORE_MAX`, plus `get_level`, `next_level_score` and `hour_word` |
| `groupbot.reborn` | `Reborn`: a weighted random country and gender of birth |
| `groupbot.sleep` | `SleepDB`: good-night and good-morning ranking with awake and sleep durations; `time_duration`, `is_morning`, `is_evening`, `good_morning_reply`, `good_night_reply` |
| `groupbot.tarot` | `Tarot`: drawing distinct major arcana cards, explaining a card and laying out a spread; `parse_count`, `card_image_url`, `format_spread` |
| `groupbot.wordcount` | Hot words: `load_stopwords`, `is_counted`, `count_words`, `rank_by_word_count`, `clamp_message_count` |
| `groupbot.zaobao` | `DailyNews`: the daily news picture, cached for up to eight hours within the same day |

## Examples

```python
import random
from datetime import datetime

from groupbot.score import ScoreDB

with ScoreDB("score.db") as db:
    result = db.sign_in(42, datetime.now())
    print(result.already_signed_in, result.score, result.level)
    print(db.top_scores(10))
```

```python
import random

from groupbot.tarot import Tarot, parse_count

tarot = Tarot.from_json(cards_json, formations_json)
for draw in tarot.draw(parse_count("抽3张塔罗牌"), rng=random.Random(1)):
    print(draw.caption(), draw.image_url)
```

```python
from groupbot.sleep import SleepDB, good_night_reply

with SleepDB("sleep.db") as db:
    position, awake = db.sleep(1001, 42)
    print(good_night_reply(position, awake))
```

Functions that pick at random take an `rng` argument, such as a
`random.Random` instance, so that results can be reproduced in tests.
`DailyNews` takes a `fetch(url, referer)` callable and a `clock`, so it can
run without the network.

## Configuration

- `RUNCODE_TOKEN`: the token that `run_code` sends to the compiler service.
- `TAROT_IMAGE_BASE`: the base URL that card image URLs are built from.

## What the package does not do

- It does not connect to a chat platform, parse commands or send messages;
  there is no command-line program or bot loop.
- It draws no images: charts of hot words or scores and sign-in cards are
  left to the caller.
- It has no daily pairing game and no word-guessing game.