"""Shared test fixtures for repoctx."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

PACKAGE_JSON = json.dumps({
    "name": "shop",
    "version": "1.2.0",
    "description": "Demo shop backend",
    "dependencies": {"express": "^4.18.0", "react": "^18.2.0"},
})

AUTH_JS = '''/**
 * Authentication helpers.
 */
export function login(user, password) {
  if (user && password) {
    return validate(user, password);
  }
  return null;
}

// TODO: expire sessions
export const logout = (session) => {
  session.clear();
};
'''

INDEX_JS = '''import { login } from './auth';
const express = require('express');

const app = express();

export function handleLogin(req, res) {
  if (!req.body) {
    return res.status(400).send('missing body');
  }
  return login(req.body.user, req.body.password);
}

app.listen(3000);
'''

USER_SERVICE_JS = '''const auth = require('src/auth.js');

export class UserService extends BaseService {
  constructor(db) {
    super();
    this.db = db;
    this.cache = {};
  }

  findUser(id) {
    return this.db.find(id);
  }
}
'''

USERS_ROUTES_JS = '''const router = require('express').Router();

router.get('/users', listUsers);
router.post('/users', createUser);

module.exports = router;
'''

AUTH_TEST_JS = '''describe('auth', () => {
  it('logs in a user', () => {});
  test('rejects an empty password', () => {});
});
'''

SAMPLE_FILES = {
    "package.json": PACKAGE_JSON,
    "src/auth.js": AUTH_JS,
    "src/index.js": INDEX_JS,
    "src/services/userService.js": USER_SERVICE_JS,
    "src/routes/users.js": USERS_ROUTES_JS,
    "tests/auth.test.js": AUTH_TEST_JS,
    "README.md": "# shop\n\nA demo shop.\n",
}


@pytest.fixture
def sample_files() -> dict[str, str]:
    """The sample JavaScript project as a path -> text map."""
    return dict(SAMPLE_FILES)


@pytest.fixture
def tmp_project(tmp_path: Path) -> Path:
    """Write the sample JavaScript project into a temporary directory."""
    for rel_path, text in SAMPLE_FILES.items():
        target = tmp_path / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text)

    # Things the listing must skip
    (tmp_path / ".gitignore").write_text("# local only\nsecrets.js\nlogs/\n")
    (tmp_path / "secrets.js").write_text("export const KEY = 'abc';\n")
    (tmp_path / "logs").mkdir()
    (tmp_path / "logs" / "app.log").write_text("started\n")
    (tmp_path / "node_modules" / "react").mkdir(parents=True)
    (tmp_path / "node_modules" / "react" / "index.js").write_text("module.exports = {};\n")

    return tmp_path
