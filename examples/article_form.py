"""
Example: editing a translatable article.

The Article record declares a hybrid title (English stored inline, other
locales under 'extra') and json-stored content blocks.
"""

import logging

from langtabs import Form, FormField, LanguageTabs, LanguageTabsConfig, set_global_config

logger = logging.getLogger(__name__)


class Article:
    translatable = {
        'title': {'driver': 'hybrid'},
        'content': {'driver': 'json'},
    }

    def __init__(self, title=None, extra=None, content=None):
        self.title = title
        self.extra = extra or {}
        self.content = content or {}

    def is_translatable_attribute(self, name):
        return name in self.translatable

    def get_translations(self, name):
        if name == 'content':
            return self.content
        return None

    def base_locale(self):
        return 'en'


def main():
    logging.basicConfig(level=logging.DEBUG)

    set_global_config(LanguageTabsConfig(
        default_locales=['en', 'fr', 'de'],
        required_locales=['en'],
        locale_labels={'en': 'English', 'fr': 'Français', 'de': 'Deutsch'},
    ))

    article = Article(
        title='Hello',
        extra={'fr': {'title': 'Bonjour'}},
        content={'en': [{'type': 'paragraph', 'data': {'text': 'Hi'}}]},
    )

    tabs = LanguageTabs([
        FormField('title', required=True),
        FormField.builder('content'),
    ])
    form = Form([tabs], record=article, state={
        'title': article.title,
        'extra': article.extra,
        'content': None,
    })
    form.render()

    german_title, german_content = tabs.get_tab('de').children
    form.set_field_state(german_title, 'Hallo')
    form.set_field_state(german_content, None)

    tabs.handle_tab_changed('tab_fr')

    logger.info(f"Form state: {form.state.to_dict()}")


if __name__ == '__main__':
    main()
