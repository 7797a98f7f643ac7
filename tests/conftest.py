import textwrap

import pytest


def rule_ids(issues):
    return [i["rule_id"] for i in issues]


GUIDE_README = """\
---
topic: ARIA Roles & Attributes
icon: "🏷️"
---
# ARIA Roles
"""

GUIDE_BUTTONS = """\
---
title: Buttons and Links
---
# Buttons and Links

Buttons perform actions; links navigate.

## Common Mistakes

| Mistake | Fix |
|---------|-----|
| div with onclick | use a button |
| Missing alt | add alt text |

### ❌ Bad: clickable div

```html
<div onclick="save()">Save</div>
```

### ✅ Good: native button

```html
<button type="button">Save</button>
```

```css
.btn:focus { outline: none; }
```

```js
document.querySelector("button").focus();
```

## Question 1: When do you use a link?

**Q:** Link or button for navigation?
**A:** A link. Buttons are for actions.

## Question 2: Keyboard support

Native buttons fire on Enter and Space.
"""

GUIDE_CONTRAST = """\
# Color Contrast

Text needs a contrast ratio of 4.5:1 against its background.
"""


def write_corpus(root):
    aria = root / "02-aria-roles"
    aria.mkdir(parents=True)
    (aria / "README.md").write_text(GUIDE_README, encoding="utf-8")
    (aria / "buttons.md").write_text(GUIDE_BUTTONS, encoding="utf-8")
    color = root / "05-color-contrast"
    color.mkdir()
    (color / "contrast.md").write_text(GUIDE_CONTRAST, encoding="utf-8")
    return root


@pytest.fixture
def guide_root(tmp_path):
    return write_corpus(tmp_path / "guides")


@pytest.fixture
def dedent():
    return lambda s: textwrap.dedent(s).strip()
