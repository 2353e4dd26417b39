"""Service layer. All services return :class:`~filepipe.services.result.ServiceResult`."""
