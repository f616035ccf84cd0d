import os

from fluidbed import app


def test_headless_run_prints_summary(capsys):
    status = app.main(['--headless', '--ticks', '5', '--seed', '1', '--particles', '1000'])

    out = capsys.readouterr().out
    assert status == 0
    assert 'Bed height: 50.0 px' in out
    assert 'Particles: 1000' in out
    assert 'Ticks: 5' in out


def test_headless_fluidized_run(capsys):
    status = app.main(['--headless', '--ticks', '20', '--velocity', '40', '--seed', '2'])

    out = capsys.readouterr().out
    assert status == 0
    assert 'Bed height: 520.0 px' in out
    assert 'Fluidization factor: 1.000' in out


def test_headless_save_figure(tmp_path, capsys):
    status = app.main(['--headless', '--ticks', '2', '--particles', '1000',
                       '--output-dir', str(tmp_path), '--save-figure'])

    assert status == 0
    assert os.path.exists(tmp_path / 'fluidbed_figure.png')
    assert 'Saved figure' in capsys.readouterr().out


def test_invalid_parameters_exit_with_error(capsys):
    status = app.main(['--headless', '--velocity', '100'])

    assert status == 2
    assert 'Error: velocity' in capsys.readouterr().out


def test_min_size_above_max_size(capsys):
    status = app.main(['--headless', '--min-size', '3', '--max-size', '2'])

    assert status == 2
    assert 'min_particle_size' in capsys.readouterr().out


def test_negative_ticks_rejected(capsys):
    assert app.main(['--headless', '--ticks', '-1']) == 2
    assert 'Error' in capsys.readouterr().out


def test_build_config_from_arguments():
    args = app.parse_arguments(['-v', '30', '-d', '0.25', '-n', '2500', '--min-size', '0.1', '--max-size', '8'])
    cfg = app.build_config(args)

    assert cfg.velocity == 30
    assert cfg.size_distribution_exponent == 0.25
    assert cfg.particle_count == 2500
    assert cfg.min_particle_size == 0.1
    assert cfg.max_particle_size == 8
