# tests/test_loader.py

import io

import pytest

from retailpulse.data.loader import DatasetSession, load_dataset
from retailpulse.exceptions import StructuralInputError
from retailpulse.schema import REQUIRED_COLUMNS, SOLD


def test_load_dataset_keeps_headers(csv_text):
    df = load_dataset(io.StringIO(csv_text))
    assert list(df.columns) == REQUIRED_COLUMNS
    assert len(df) == 6


def test_missing_column_rejected(csv_text):
    text = csv_text.replace('Revenue (PHP)', 'Revenue')
    with pytest.raises(StructuralInputError) as err:
        load_dataset(io.StringIO(text))
    assert err.value.missing_columns == ['Revenue (PHP)']


def test_empty_file_rejected():
    with pytest.raises(StructuralInputError):
        load_dataset(io.StringIO(''))


def test_missing_path_rejected(tmp_path):
    with pytest.raises(StructuralInputError):
        load_dataset(str(tmp_path / 'nope.csv'))


def test_malformed_cells_are_not_structural(csv_text):
    text = csv_text.replace('Store A,Item X,Jan,1000,650', 'Store A,Item X,Jan,1000,abc')
    df = load_dataset(io.StringIO(text))
    assert len(df) == 6
    assert df[SOLD].iloc[0] == 'abc'


def test_session_replaces_wholesale(csv_text, constant_df):
    session = DatasetSession()
    assert not session.is_loaded
    assert session.summary() == {'records': 0, 'stores': 0, 'source': None}

    session.load(io.StringIO(csv_text), source_name='first.csv')
    assert session.summary() == {'records': 6, 'stores': 2, 'source': 'first.csv'}

    session.replace(constant_df, source_name='second')
    assert session.summary() == {'records': 4, 'stores': 1, 'source': 'second'}

    session.clear()
    assert session.current is None


def test_replace_copies_input(constant_df):
    session = DatasetSession()
    session.replace(constant_df)
    constant_df.loc[0, SOLD] = 999
    assert session.current[SOLD].iloc[0] == 50


def test_failed_load_keeps_previous(csv_text):
    session = DatasetSession()
    session.load(io.StringIO(csv_text))
    with pytest.raises(StructuralInputError):
        session.load(io.StringIO('a,b\n1,2\n'))
    assert session.summary()['records'] == 6


def test_same_name_reupload_replaces_table(csv_text):
    session = DatasetSession()
    assert session.needs_reload('upload-1')
    session.load(io.StringIO(csv_text), source_name='sales.csv', upload_id='upload-1')
    assert not session.needs_reload('upload-1')

    corrected = csv_text.replace('Store B,Item Y,Mar,200,100', 'Store B,Item Y,Mar,200,999')
    assert session.needs_reload('upload-2')
    session.load(io.StringIO(corrected), source_name='sales.csv', upload_id='upload-2')
    assert session.current[SOLD].iloc[-1] == 999
    assert session.upload_id == 'upload-2'


def test_no_upload_never_reloads():
    assert not DatasetSession().needs_reload(None)


def test_failed_reupload_keeps_upload_id(csv_text):
    session = DatasetSession()
    session.load(io.StringIO(csv_text), upload_id='upload-1')
    with pytest.raises(StructuralInputError):
        session.load(io.StringIO('a,b\n1,2\n'), upload_id='upload-2')
    assert session.upload_id == 'upload-1'
    assert session.needs_reload('upload-2')
