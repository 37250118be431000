"""State layer.

The record store, the edit-form session and the notification channel.
Service responses reach the collection only through
:class:`~pyuserdesk.state.store.RecordStore`.
"""
