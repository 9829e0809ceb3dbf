"""Shared pytest fixtures for the boilerstrip test suite.

Provides reusable fixtures for:
- Annotated template file contents (TSX, TS, YAML)
- A small generated-project tree on disk
- Snapshot helpers for asserting that a dry run touches nothing
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest


# ---------------------------------------------------------------------------
# Template contents
# ---------------------------------------------------------------------------

WELCOME_SCREEN = textwrap.dedent("""\
    import React from "react"
    import { observer } from "mobx-react-lite" // @mst remove-current-line
    import { View } from "react-native"
    // @mst remove-next-line
    import { useStores } from "../models"
    import { Text } from "../components"

    interface WelcomeScreenProps {
      title: string
    }

    // @mst observer-block-start
    export const WelcomeScreen: React.FC<WelcomeScreenProps> = observer(function WelcomeScreen(props) {
      // @mst remove-block-start
      const { authenticationStore } = useStores()
      const { logout } = authenticationStore
      // @mst remove-block-end
      return <View><Text text={props.title} /></View>
    }) // @mst observer-block-end
""")

WELCOME_SCREEN_REMOVED = textwrap.dedent("""\
    import React from "react"
    import { View } from "react-native"
    import { Text } from "../components"

    interface WelcomeScreenProps {
      title: string
    }

    export const WelcomeScreen: React.FC<WelcomeScreenProps> = (props) => {
      return <View><Text text={props.title} /></View>
    }
""")

EPISODE_MODEL = textwrap.dedent("""\
    // @mst remove-file
    import { types } from "mobx-state-tree"
    import { withSetPropAction } from "./helpers/withSetPropAction" // @mst remove-current-line

    export const EpisodeModel = types.model("Episode").actions(withSetPropAction)
""")

LOGIN_FLOW = textwrap.dedent("""\
    # @mst remove-file
    appId: com.myapp
    ---
    - launchApp
    - tapOn: "Log In"
""")

THEME = textwrap.dedent("""\
    export const colors = {
      palette: { neutral100: "#FFFFFF" },
    }
""")

DEMO_SCREEN = textwrap.dedent("""\
    <View>
      {/* @demo remove-current-line */}
      <DemoBanner />
      <Text text="hello" />
    </View>
""")


@pytest.fixture
def welcome_screen() -> str:
    """A screen annotated with every line/block/observer directive."""
    return WELCOME_SCREEN


@pytest.fixture
def welcome_screen_removed() -> str:
    """The expected remove-mode output for :func:`welcome_screen`."""
    return WELCOME_SCREEN_REMOVED


# ---------------------------------------------------------------------------
# Project tree
# ---------------------------------------------------------------------------

def _write(root: Path, rel: str, content: str | bytes) -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def project_tree(tmp_path: Path) -> Path:
    """A miniature generated project with annotated and plain files.

    Layout::

        MyApp/
          app/screens/WelcomeScreen.tsx   (line/block/observer directives)
          app/models/Episode.ts           (remove-file)
          app/theme/colors.ts             (no directives)
          assets/logo.png                 (binary)
          .maestro/flows/Login.yaml       (# remove-file)
          node_modules/mobx/index.ts      (excluded by default)
          .git/HEAD                       (excluded by default)
          ios/Pods/Manifest.lock          (excluded by default)
    """
    root = tmp_path / "MyApp"
    _write(root, "app/screens/WelcomeScreen.tsx", WELCOME_SCREEN)
    _write(root, "app/models/Episode.ts", EPISODE_MODEL)
    _write(root, "app/theme/colors.ts", THEME)
    _write(root, "assets/logo.png", b"\x89PNG\r\n\x1a\n\xff\xfe\x00\x00")
    _write(root, ".maestro/flows/Login.yaml", LOGIN_FLOW)
    _write(root, "node_modules/mobx/index.ts", "export {} // @mst remove-current-line\n")
    _write(root, ".git/HEAD", "ref: refs/heads/main\n")
    _write(root, "ios/Pods/Manifest.lock", "# @mst remove-file\n")
    yield root


def snapshot(root: Path) -> dict[str, tuple[bytes, int]]:
    """Map every file under *root* to its bytes and mtime."""
    return {
        str(p.relative_to(root)): (p.read_bytes(), p.stat().st_mtime_ns)
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


@pytest.fixture
def tree_snapshot():
    """Expose :func:`snapshot` to tests."""
    return snapshot
