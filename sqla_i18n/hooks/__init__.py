from sqlalchemy import event

from .after_create import after_create
from .after_update import after_update
from .after_delete import after_delete
from .storage import discard_reload, reload_translations


def install_model_hooks(registry, model):
    event.listen(model, "after_insert", after_create(registry))
    event.listen(model, "after_update", after_update(registry))
    event.listen(model, "after_delete", after_delete(registry))


def install_reload_listener(target):
    if not event.contains(target, "after_flush_postexec", reload_translations):
        event.listen(target, "after_flush_postexec", reload_translations)
    if not event.contains(target, "after_soft_rollback", discard_reload):
        event.listen(target, "after_soft_rollback", discard_reload)


__all__ = [
    'after_create', 'after_update', 'after_delete', 'reload_translations', 'discard_reload',
    'install_model_hooks', 'install_reload_listener'
]
