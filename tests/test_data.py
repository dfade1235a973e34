import json

import pytest
from pydantic import ValidationError

from utils.data import PortfolioStore, PortfolioNotFoundError, PortfolioSaveError


@pytest.fixture
def store(app_ctx):
    return PortfolioStore(app_ctx)


def test_get_loads_lazily_and_caches(store, data_file, sample_portfolio):
    assert not store.is_loaded
    assert store.get() == sample_portfolio
    assert store.is_loaded

    # Out-of-band edits are not seen until invalidated
    data_file.write_text(json.dumps(dict(sample_portfolio, name='Changed')), encoding='utf-8')
    assert store.get()['name'] == 'Jane Doe'

    store.invalidate()
    assert store.get()['name'] == 'Changed'


def test_missing_file_is_not_found(app_ctx, tmp_path):
    app_ctx.config['PORTFOLIO_DATA_FILE'] = str(tmp_path / 'missing.json')
    store = PortfolioStore(app_ctx)
    with pytest.raises(PortfolioNotFoundError):
        store.get()


def test_corrupt_file_is_not_found(store, data_file):
    data_file.write_text('{not json', encoding='utf-8')
    with pytest.raises(PortfolioNotFoundError):
        store.get()


def test_replace_persists_whole_document(store, data_file, sample_portfolio):
    sample_portfolio['name'] = 'Janet Doe'
    sample_portfolio['projects'] = sample_portfolio['projects'][:1]

    accepted = store.replace(sample_portfolio)

    assert accepted['name'] == 'Janet Doe'
    assert store.get() is accepted
    on_disk = json.loads(data_file.read_text(encoding='utf-8'))
    assert on_disk == accepted
    assert len(on_disk['projects']) == 1


def test_replace_omits_unset_optional_fields(store, sample_portfolio):
    accepted = store.replace(sample_portfolio)
    assert 'resumeUrl' not in accepted
    assert 'liveUrl' not in accepted['projects'][0]
    assert accepted['projects'][0]['images'] == ['stored.png']


def test_invalid_document_is_rejected_without_mutation(store, data_file, sample_portfolio):
    before = store.get()
    raw_before = data_file.read_text(encoding='utf-8')

    del sample_portfolio['contact']['email']
    with pytest.raises(ValidationError):
        store.replace(sample_portfolio)

    assert store.get() is before
    assert data_file.read_text(encoding='utf-8') == raw_before


@pytest.mark.parametrize('mutate', [
    lambda doc: doc['skills']['frontend'][0].update(level=6),
    lambda doc: doc['skills']['tools'][0].update(level=0),
    lambda doc: doc['projects'][0].update(category='desktop'),
    lambda doc: doc['contact'].update(email='not-an-email'),
    lambda doc: doc.pop('hero'),
])
def test_schema_rules(store, sample_portfolio, mutate):
    mutate(sample_portfolio)
    with pytest.raises(ValidationError):
        store.replace(sample_portfolio)


def test_save_failure_keeps_new_document_in_memory(app_ctx, tmp_path, sample_portfolio):
    app_ctx.config['PORTFOLIO_DATA_FILE'] = str(tmp_path / 'no-such-dir' / 'data.json')
    store = PortfolioStore(app_ctx)

    with pytest.raises(PortfolioSaveError):
        store.replace(sample_portfolio)

    assert store.get()['name'] == sample_portfolio['name']


@pytest.mark.parametrize('content', ['[]', 'null', '"portfolio"'])
def test_non_object_file_is_not_found(store, data_file, content):
    data_file.write_text(content, encoding='utf-8')
    with pytest.raises(PortfolioNotFoundError):
        store.get()
    assert not store.is_loaded
