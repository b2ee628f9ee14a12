"""Integration tests for LanguageTabs.

Tests the full clone → hydrate → edit cycle through a host Form.
"""
import pytest

from langtabs import (
    CollectionBinding,
    Form,
    FormField,
    LanguageTabs,
    LanguageTabsConfig,
    LocaleBinding,
    Section,
    config_context,
)

from conftest import TranslatableArticle


def field_for(tabs, locale, index=0):
    return tabs.get_tab(locale).children[index]


def render(components, **form_kwargs):
    form = Form(components, **form_kwargs)
    form.render()
    return form


class TestCloning:

    def test_tabs_per_locale(self):
        tabs = LanguageTabs([FormField('title')])
        with config_context(default_locales=['en', 'fr', 'en'], locale_labels={'en': 'English'}):
            render([tabs])

        assert [tab.key for tab in tabs.get_child_components()] == ['tab_en', 'tab_fr']
        assert [tab.label for tab in tabs.get_child_components()] == ['English', 'FR']

    def test_clone_names_and_paths(self):
        tabs = LanguageTabs([FormField('title'), FormField('slug', state_path='seo.slug')])
        render([tabs])

        fr_title, fr_slug = tabs.get_tab('fr').children
        assert fr_title.name == 'title_fr'
        assert fr_title.get_state_path() == 'title.fr'
        assert fr_slug.name == 'slug_fr'
        assert fr_slug.get_state_path() == 'seo.slug.fr'

    def test_declared_fields_untouched(self):
        declared = FormField('title', required=True)
        tabs = LanguageTabs([declared])
        render([tabs])

        assert declared.name == 'title'
        assert declared.state_path is None
        assert declared.hydration_hooks == []

    def test_required_locales(self):
        """Test that only listed locales keep their required-ness."""
        tabs = LanguageTabs([FormField('title', required=True), FormField('note')])
        with config_context(default_locales=['en', 'fr', 'de'], required_locales=['en']):
            render([tabs])

        assert field_for(tabs, 'en').required is True
        assert field_for(tabs, 'en', 1).required is False
        assert field_for(tabs, 'fr').required is False
        assert field_for(tabs, 'de').required is False

    def test_binding_per_kind(self):
        tabs = LanguageTabs([FormField('title'), FormField.repeater('links'), FormField.builder('blocks')])
        render([tabs])

        title, links, blocks = tabs.get_tab('en').children
        assert type(tabs.get_binding(title)) is LocaleBinding
        assert type(tabs.get_binding(links)) is CollectionBinding
        assert type(tabs.get_binding(blocks)) is CollectionBinding
        assert tabs.has_collection_fields

    def test_callable_schema_and_non_field_components(self):
        section = Section([FormField('ignored')], heading='Extra')
        tabs = LanguageTabs(lambda: [FormField('title'), section])
        render([tabs])

        title, cloned_section = tabs.get_tab('fr').children
        assert title.get_state_path() == 'title.fr'
        assert isinstance(cloned_section, Section)
        assert cloned_section is not section
        assert not tabs.has_collection_fields

    def test_hybrid_paths(self, hybrid_article):
        tabs = LanguageTabs([FormField('title'), FormField('summary')])
        render([tabs], record=hybrid_article)

        assert field_for(tabs, 'en').get_state_path() == 'title'
        assert field_for(tabs, 'fr').get_state_path() == 'extra.fr.title'
        assert field_for(tabs, 'en', 1).get_state_path() == 'meta.en.summary'
        assert field_for(tabs, 'fr', 1).get_state_path() == 'meta.fr.summary'


class TestScalarSync:

    def test_hydrate_and_edit(self, article):
        """Test the persisted-translation scenario end to end."""
        tabs = LanguageTabs([FormField('title')])
        form = render([tabs], record=article, state={'title': 'Hello'})
        fr_title = field_for(tabs, 'fr')

        assert form.get_field_state(fr_title) is None
        assert form.get('title') == {'en': 'Hello', 'fr': None}

        form.set_field_state(fr_title, 'Bonjour')

        assert form.get('title') == {'en': 'Hello', 'fr': 'Bonjour'}
        assert form.refreshed[-1] == ['title.fr', 'title']

    def test_scalar_state_seeds_base_locale(self):
        tabs = LanguageTabs([FormField('title')])
        form = render([tabs], state={'title': 'Hello'})

        assert form.get_field_state(field_for(tabs, 'en')) == 'Hello'
        assert form.get_field_state(field_for(tabs, 'fr')) is None

    def test_empty_string_stored_as_none(self):
        tabs = LanguageTabs([FormField('title')])
        form = render([tabs], state={'title': {'en': 'Hello', 'fr': 'Salut'}})

        form.set_field_state(field_for(tabs, 'fr'), '')
        assert form.get('title') == {'en': 'Hello', 'fr': None}

    def test_hydration_writes_are_silent(self):
        events = []
        tabs = LanguageTabs([FormField('title')])
        form = Form([tabs], state={'title': 'Hello'})
        form.state.on_updated(lambda path, value: events.append(path))

        form.render()
        assert events == []

        form.set_field_state(field_for(tabs, 'fr'), 'Bonjour')
        assert events == ['title.fr', 'title']

    def test_nested_attribute_path(self):
        tabs = LanguageTabs([FormField('title', state_path='seo.title')])
        form = render([tabs], state={'seo': {'title': 'Hello'}})

        form.set_field_state(field_for(tabs, 'fr'), 'Bonjour')
        assert form.get('seo.title') == {'en': 'Hello', 'fr': 'Bonjour'}
        assert form.refreshed[-1] == ['seo.title.fr', 'seo.title']

    def test_no_cross_locale_leakage(self):
        tabs = LanguageTabs([FormField('title')])
        with config_context(default_locales=['en', 'fr', 'de']):
            form = render([tabs], state={'title': {'en': 'Hello'}})

        form.set_field_state(field_for(tabs, 'de'), 'Hallo')
        form.set_field_state(field_for(tabs, 'fr'), 'Bonjour')

        assert form.get('title') == {'en': 'Hello', 'fr': 'Bonjour', 'de': 'Hallo'}

    def test_hybrid_slots(self, hybrid_article):
        tabs = LanguageTabs([FormField('title')])
        form = render([tabs], record=hybrid_article, state={'title': 'Hello'})

        assert form.get_field_state(field_for(tabs, 'en')) == 'Hello'
        assert form.get_field_state(field_for(tabs, 'fr')) is None

        form.set_field_state(field_for(tabs, 'fr'), 'Bonjour')

        assert form.get('title') == 'Hello'
        assert form.get('extra.fr.title') == 'Bonjour'
        assert form.refreshed[-1] == ['extra.fr.title', 'title']


class TestCollectionSync:

    def test_empty_edit_stored_as_empty_list(self):
        tabs = LanguageTabs([FormField.repeater('links')])
        with config_context(default_locales=['en', 'fr', 'de']):
            form = render([tabs])

        form.set_field_state(field_for(tabs, 'de'), None)
        assert form.get('links.de') == []

        form.set_field_state(field_for(tabs, 'de'), '')
        assert form.get('links.de') == []

    def test_hydrate_non_collection_as_empty(self):
        tabs = LanguageTabs([FormField.builder('blocks')])
        form = render([tabs], state={'blocks': {'en': [{'type': 'p'}], 'fr': 'oops'}})

        assert form.get_field_state(field_for(tabs, 'en')) == [{'type': 'p'}]
        assert form.get_field_state(field_for(tabs, 'fr')) == []

    def test_metadata_tags_and_keys(self):
        tabs = LanguageTabs([FormField.builder('blocks', state_path='page.blocks')])
        render([tabs])

        fr_blocks = field_for(tabs, 'fr')
        assert fr_blocks.get_meta('language_tabs') == {
            'attribute': 'blocks',
            'locale': 'fr',
            'attribute_path': 'page.blocks',
        }
        assert fr_blocks.key == f"language_tabs.blocks_fr.{fr_blocks.identity}"

    def test_existing_hydration_hook_runs_first(self):
        order = []
        declared = FormField.repeater('links')
        declared.after_state_hydrated(lambda field, state: order.append(('existing', field.name)))

        tabs = LanguageTabs([declared])
        form = Form([tabs], state={'links': {'en': [{'url': 'a'}]}})
        form.state.on_updated(lambda path, value: order.append(('write', path)))
        form.render()

        assert order[0] == ('existing', 'links_en')
        assert form.get_field_state(field_for(tabs, 'en')) == [{'url': 'a'}]

    def test_hooks_installed_once_per_cycle(self):
        tabs = LanguageTabs([FormField.repeater('links')])
        render([tabs])

        en_links = field_for(tabs, 'en')
        binding = tabs.get_binding(en_links)
        hooks_before = len(en_links.hydration_hooks)

        assert binding.install(en_links) is False
        assert len(en_links.hydration_hooks) == hooks_before

        # A new cycle rebuilds clones with new identities
        tabs.begin_render()
        assert field_for(tabs, 'en').identity != en_links.identity


class TestLocaleSwitch:

    def test_refresh_active_locale_only(self):
        tabs = LanguageTabs([FormField.builder('blocks'), FormField('title')])
        form = render([tabs], state={'blocks': {'en': [], 'fr': []}})

        form.state.set('blocks', {'en': [], 'fr': [{'type': 'quote'}]}, notify=False)
        refreshed = tabs.handle_tab_changed('tab_fr')

        assert tabs.current_locale == 'fr'
        assert refreshed == [field_for(tabs, 'fr')]
        assert form.get_field_state(field_for(tabs, 'fr')) == [{'type': 'quote'}]

    def test_refresh_skips_invisible(self):
        tabs = LanguageTabs([FormField.builder('blocks')])
        render([tabs])

        field_for(tabs, 'fr').visible = False
        assert tabs.change_locale('fr') == []

    def test_refresh_fires_update_hooks(self):
        tabs = LanguageTabs([FormField.repeater('links')])
        form = render([tabs])

        assert len(tabs.refresh_collection_fields('en')) == 1
        assert form.refreshed[-1] == ['links.en', 'links']

    def test_refresh_under_hidden_tab(self):
        """Test that hiding the locale tab does not hide its fields from the refresh."""
        tabs = LanguageTabs([FormField.builder('blocks')])
        form = render([tabs])

        tabs.get_tab('fr').visible = False
        form.state.set('blocks', {'en': [], 'fr': [{'type': 'quote'}]}, notify=False)

        assert tabs.change_locale('fr') == [field_for(tabs, 'fr')]
        assert form.get_field_state(field_for(tabs, 'fr')) == [{'type': 'quote'}]

    def test_refresh_under_hidden_section(self):
        tabs = LanguageTabs([FormField.repeater('links')])
        form = render([Section([tabs], visible=False)])

        form.state.set('links', {'en': [{'url': 'a'}], 'fr': []}, notify=False)

        assert tabs.change_locale('en') == [field_for(tabs, 'en')]
        assert form.refreshed[-1] == ['links.en', 'links']

    def test_default_current_locale_is_first(self):
        tabs = LanguageTabs([FormField('title')])
        with config_context(default_locales=['de', 'en']):
            render([tabs])
        assert tabs.current_locale == 'de'


class TestLocaleSources:

    def test_record_locales(self):
        record = TranslatableArticle(locales=['pl', 'uk'])
        tabs = LanguageTabs([FormField('title')])
        render([tabs], record=record)
        assert tabs.locales == ['pl', 'uk']

    def test_model_class_without_record(self):
        tabs = LanguageTabs([FormField('title')])
        render([tabs], model=TranslatableArticle)
        assert tabs.locales == ['en', 'fr']

    def test_fixed_config(self):
        tabs = LanguageTabs([FormField('title')], config=LanguageTabsConfig(app_locale='ja'))
        render([tabs])
        assert tabs.locales == ['ja']


@pytest.mark.parametrize("locale", ['en', 'fr'])
def test_rerender_keeps_paths_stable(locale):
    tabs = LanguageTabs([FormField('title')])
    form = render([tabs])
    first = field_for(tabs, locale).get_state_path()

    form.render()
    assert field_for(tabs, locale).get_state_path() == first


class TestNestedTabs:

    def test_nested_tabs_get_host(self):
        """Test tabs declared inside a section sync like top-level ones."""
        tabs = LanguageTabs([FormField('title')])
        form = render([Section([tabs])], state={'title': 'Hello'})

        assert tabs.host is form
        assert form.get('title') == {'en': 'Hello', 'fr': None}

        form.set_field_state(field_for(tabs, 'fr'), 'Bonjour')

        assert form.get('title') == {'en': 'Hello', 'fr': 'Bonjour'}
        assert form.refreshed[-1] == ['title.fr', 'title']

    def test_nested_tabs_rerender_starts_new_cycle(self):
        tabs = LanguageTabs([FormField.repeater('links')])
        form = render([Section([Section([tabs])], visible=False)], record=TranslatableArticle())
        token = tabs.cycle.token
        en_links = field_for(tabs, 'en')

        form.render()

        assert tabs.cycle.token == token + 1
        assert field_for(tabs, 'en').identity != en_links.identity
