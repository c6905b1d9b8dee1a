import json

import pytest
from PIL import Image

from batch_generate import candidate_seeds
from theme_engine import main
from theme_tokens import TOKEN_KEYS


def test_cli_prints_theme(capsys):
    main(['--seed-color', '#3a5cb8', '--mode', 'triadic', '--brightness', '-1'])
    output = json.loads(capsys.readouterr().out)
    assert output['seed'] == '#3a5cb8'
    assert output['mode'] == 'triadic'
    assert list(output['light']) == list(TOKEN_KEYS)


def test_cli_score(capsys):
    main(['--seed-color', '#3a5cb8', '--score'])
    output = json.loads(capsys.readouterr().out)
    assert output['score'] > 0
    assert isinstance(output['rejects'], list)


def test_cli_dark_levels_and_override(capsys):
    main(['--seed', 'cli', '--dark-levels', '2', '-2', '1', '--dark-first',
          '--override', '#d03030', '', '', '', ''])
    output = json.loads(capsys.readouterr().out)
    assert len(output['dark']) == len(TOKEN_KEYS)


def test_cli_swatches(tmp_path, capsys):
    path = tmp_path / 'swatches.png'
    main(['--seed-color', '#3a5cb8', '--swatches', str(path)])
    json.loads(capsys.readouterr().out)
    with Image.open(path) as img:
        assert img.width > 0 and img.height > 0


def test_cli_bad_config(tmp_path):
    path = tmp_path / 'bad.yaml'
    path.write_text('nonsense: {}\n')
    with pytest.raises(SystemExit) as exc:
        main(['--config', str(path)])
    assert exc.value.code == 1


def test_candidate_seeds():
    assert candidate_seeds(2, 3, 'x') == ['x-2-0', 'x-2-1', 'x-2-2']
