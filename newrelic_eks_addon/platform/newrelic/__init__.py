from .newrelic_addon_construct import NewRelicAddOn
