from sample_mappers.mappers import CustomerMapper as CustomerMapper
