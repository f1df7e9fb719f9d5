"""
CLI integration tests
"""

import subprocess
import sys

from jni_peer_generator.errors import EXIT_INTERNAL_BUG, EXIT_MODEL_ERROR
from jni_peer_generator.main import build_config, build_parser


def run_cli(*args):
    return subprocess.run(
        [sys.executable, "-m", "jni_peer_generator.main", *args],
        capture_output=True,
        text=True
    )


def test_cli_generates_car(car_model_file, tmp_path):
    """Test the CLI writes both peer files"""
    output_dir = tmp_path / "generated"

    result = run_cli("-m", str(car_model_file), "-d", str(output_dir))

    assert result.returncode == 0, f"CLI failed: {result.stderr}"
    header = (output_dir / "CarManagedPeer.h").read_text(encoding="latin-1")
    source = (output_dir / "CarManagedPeer.cpp").read_text(encoding="latin-1")
    assert "class CarManagedPeer : public ::JNI::ManagedPeer" in header
    assert 'GetMethodID(GetClass(), "getCost", "()D")' in source


def test_cli_verbose_second_run(car_model_file, tmp_path):
    """Test a second run leaves files alone and says so"""
    output_dir = tmp_path / "generated"
    run_cli("-m", str(car_model_file), "-d", str(output_dir))

    result = run_cli("-m", str(car_model_file), "-d", str(output_dir), "-v")

    assert result.returncode == 0, f"CLI failed: {result.stderr}"
    assert "[No need to update file" in result.stdout
    assert "0 written" in result.stdout


def test_cli_options(car_model_file, tmp_path):
    """Test namespace, pch and static initialization options"""
    output_dir = tmp_path / "generated"

    result = run_cli(
        "-m", str(car_model_file), "-d", str(output_dir),
        "--namespace", "My.Peers", "--pch", "stdafx.h", "--static-init",
    )

    assert result.returncode == 0, f"CLI failed: {result.stderr}"
    header = (output_dir / "CarManagedPeer.h").read_text()
    source = (output_dir / "CarManagedPeer.cpp").read_text()
    assert "namespace My { namespace Peers {" in header
    assert source.splitlines()[1] == '#include "stdafx.h"'
    assert "call_once" not in source


def test_cli_missing_namespace(tmp_path):
    """Test a tagged class without namespace fails with the model error status"""
    model = tmp_path / "model.xml"
    model.write_text('<peers><class name="a.B" tagged="true"/></peers>')

    result = run_cli("-m", str(model), "-d", str(tmp_path / "out"))

    assert result.returncode == EXIT_MODEL_ERROR
    assert "does not define a namespace" in result.stderr


def test_cli_no_tagged_classes(tmp_path):
    model = tmp_path / "model.xml"
    model.write_text('<peers><class name="a.B"/></peers>')

    result = run_cli("-m", str(model), "-d", str(tmp_path / "out"))

    assert result.returncode == 1
    assert "No tagged classes" in result.stderr


def test_cli_missing_model_file(tmp_path):
    result = run_cli("-m", str(tmp_path / "missing.xml"), "-d", str(tmp_path))
    assert result.returncode != 0
    assert "Model file not found" in result.stderr


def test_exit_statuses_are_distinct():
    assert EXIT_MODEL_ERROR != EXIT_INTERNAL_BUG


def test_config_file_with_overrides(tmp_path):
    """Test command line options override the settings file"""
    settings = tmp_path / "settings.xml"
    settings.write_text('<peers output="from_file" namespace="File.Ns" pch="file.h"/>')

    args = build_parser().parse_args(["-m", "model.xml", "-C", str(settings), "--pch", "cli.h", "--force"])
    config = build_config(args)

    assert config.output_dir == "from_file"
    assert config.namespace == "File.Ns"
    assert config.pch == "cli.h"
    assert config.force is True


def test_default_output_directory():
    args = build_parser().parse_args(["-m", "model.xml"])
    assert build_config(args).output_dir == "."


def test_lookup_and_constants_flags():
    args = build_parser().parse_args(["-m", "model.xml", "--internal-class-names", "--constants"])
    config = build_config(args)

    assert config.internal_class_names is True
    assert config.emit_constants is True


def test_cli_class_lookup_uses_descriptor(car_model_file, tmp_path):
    """Test the generated class handle is looked up by descriptor"""
    output_dir = tmp_path / "generated"

    result = run_cli("-m", str(car_model_file), "-d", str(output_dir))

    assert result.returncode == 0, f"CLI failed: {result.stderr}"
    source = (output_dir / "CarManagedPeer.cpp").read_text()
    assert 'instance("Lcom/jnitest/Car;")' in source
