from pathlib import Path

import pytest
from testfixtures import ShouldRaise, compare

from imgdeploy.core.environment import Environment
from imgdeploy.core.packaging import StagingAssetPackager, fingerprint

ENV = Environment(account="123456789012", region="eu-west-1")


@pytest.fixture
def build_dir(tmp_path) -> Path:
    path = tmp_path / "build"
    (path / "src").mkdir(parents=True)
    (path / "Dockerfile").write_text("FROM scratch\n")
    (path / "src" / "app.py").write_text("print('hello')\n")

    return path


def test_fingerprint__is_stable(build_dir):
    compare(fingerprint(str(build_dir)), fingerprint(str(build_dir)))


def test_fingerprint__changes_with_content(build_dir):
    before = fingerprint(str(build_dir))

    (build_dir / "src" / "app.py").write_text("print('bye')\n")

    compare(fingerprint(str(build_dir)) == before, False)


def test_fingerprint__ignores_excluded_files(build_dir):
    before = fingerprint(str(build_dir), exclude=["*.pyc", ".git"])

    (build_dir / "src" / "app.pyc").write_bytes(b"\0\1")
    (build_dir / ".git").mkdir()
    (build_dir / ".git" / "HEAD").write_text("ref: refs/heads/main\n")

    compare(fingerprint(str(build_dir), exclude=["*.pyc", ".git"]), before)


def test_StagingAssetPackager__packages_into_staging_repository(build_dir):
    packager = StagingAssetPackager(env=ENV, qualifier="test")

    asset = packager.package(str(build_dir))

    compare(asset.repository.name, "test-container-assets-123456789012-eu-west-1")
    compare(
        asset.image_uri,
        "123456789012.dkr.ecr.eu-west-1.amazonaws.com/"
        f"test-container-assets-123456789012-eu-west-1:{fingerprint(str(build_dir))}",
    )
    compare(packager.assets, [asset])


def test_StagingAssetPackager__raises_FileNotFoundError_without_dockerfile(build_dir):
    (build_dir / "Dockerfile").unlink()
    packager = StagingAssetPackager(env=ENV)

    with ShouldRaise(FileNotFoundError):
        packager.package(str(build_dir))

    compare(packager.assets, [])


def test_StagingAssetPackager__raises_FileNotFoundError_for_missing_directory(tmp_path):
    packager = StagingAssetPackager(env=ENV)

    with ShouldRaise(FileNotFoundError):
        packager.package(str(tmp_path / "missing"))
