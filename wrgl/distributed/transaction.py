"""Handle file based transactions allowing safe restarts at any point.

Output files are written to temporary locations during processing and moved
to the final location when finished, so a report or VCF on disk is always
complete independent of how a run was interrupted.
"""
import contextlib
import os
import shutil
import tempfile

import toolz as tz

from wrgl import utils


DEFAULT_TMP = 'wrgltx'


@contextlib.contextmanager
def tx_tmpdir(config=None, base_dir=None, remove=True):
    """Context manager to create and remove a transactional temporary directory.

    Uses the configured `resources: tmp: dir` if present, otherwise a
    `wrgltx` directory inside base_dir or the current directory.
    """
    base_dir = base_dir or os.getcwd()
    tmpdir_base = utils.get_abspath(_get_base_tmpdir(config, base_dir))
    utils.safe_makedir(tmpdir_base)
    tmp_dir = tempfile.mkdtemp(dir=tmpdir_base)
    try:
        yield tmp_dir
    finally:
        if remove:
            utils.remove_safe(tmp_dir)


def _get_base_tmpdir(config, fallback_base_dir):
    config_tmpdir = tz.get_in(("resources", "tmp", "dir"), config)
    return config_tmpdir or os.path.join(fallback_base_dir, DEFAULT_TMP)


@contextlib.contextmanager
def file_transaction(*config_and_files):
    """Wrap file generation in a transaction, moving to output if finishes.

    The initial argument can be a configuration dictionary, used to identify
    settings for the temporary directory transactional files are created in.
    """
    config, orig_names = _normalize_args(config_and_files)
    base_dir = os.path.dirname(os.path.abspath(orig_names[0])) if orig_names else None
    with tx_tmpdir(config, base_dir) as tmpdir:
        safe_names = [os.path.join(tmpdir, os.path.basename(f)) for f in orig_names]
        if len(safe_names) == 1:
            yield safe_names[0]
        else:
            yield tuple(safe_names)

        for safe, orig in zip(safe_names, orig_names):
            if os.path.exists(safe):
                _move_file_with_sizecheck(safe, orig)


def _move_file_with_sizecheck(tx_file, final_file):
    """Move transaction file to final location, with size checks avoiding failed transfers.
    """
    utils.safe_makedir(os.path.dirname(os.path.abspath(final_file)))
    want_size = utils.get_size(tx_file)
    shutil.move(tx_file, final_file)
    transfer_size = utils.get_size(final_file)

    assert want_size == transfer_size, (
        'distributed.transaction.file_transaction: File copy error: '
        'file on temporary storage ({}) size {} bytes does not equal size '
        'of file after transfer ({}) size {} bytes'.format(
            tx_file, want_size, final_file, transfer_size)
    )


def _normalize_args(config_and_files):
    if config_and_files and isinstance(config_and_files[0], dict):
        config, files = config_and_files[0], config_and_files[1:]
    else:
        config, files = None, config_and_files
    return config, [f for f in _flatten(files) if f]


def _flatten(iterable):
    for elem in iterable:
        if isinstance(elem, (tuple, list)):
            for i in elem:
                yield i
        else:
            yield elem
